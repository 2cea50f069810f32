from typing import Literal
from pydantic import BaseModel, Field

class SystemSettings(BaseModel):
    """
    Global system configuration settings.
    """
    # Primary DB (Dayzer scenario results)
    primary_database_url: str = Field(
        default="postgresql+psycopg2://localhost:5432/dayzer",
        description="SQLAlchemy URL of the Dayzer results database",
    )

    # Secondary DB (ISO fundamentals)
    secondary_database_url: str = Field(
        default="postgresql+psycopg2://localhost:5432/fundamentals",
        description="SQLAlchemy URL of the fundamentals database",
    )
    secondary_sslmode: str | None = Field(default="require", description="libpq sslmode for the secondary DB")

    # Views catalog
    views_file: str = Field(default="views.yaml", description="Path to accuracy views configuration file")

    # Scenario calendar
    scenario_name_filter: str = Field(default="CAISO_WEEK", description="Substring selecting calendar scenarios")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO", description="Root log level")

    def secondary_connect_args(self) -> dict:
        """Driver connect arguments for the secondary DB."""
        if self.secondary_sslmode and self.secondary_database_url.startswith("postgresql"):
            return {"sslmode": self.secondary_sslmode}
        return {}
