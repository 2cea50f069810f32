import argparse
import asyncio
import sys

from outlook.adapters.config.settings_loader import load_settings
from outlook.adapters.config.yaml_store import YamlViewStore


async def main(path: str) -> int:
    store = YamlViewStore(config_path=path)
    views = await store.list_views()
    if not views:
        print(f"No valid views found in {path}")
        return 1

    for view in views:
        print(f"{view.name}: {view.description} (window={view.window_days}d on {view.window_table})")
        for comparison in view.comparisons:
            forecast, actual = comparison.forecast, comparison.actual
            print(
                f"  - {comparison.name}: {forecast.label} [{forecast.convention}/{forecast.policy}]"
                f" vs {actual.label} [{actual.convention}/{actual.policy}]"
            )
    print("Views loaded successfully!")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Validate the accuracy views catalog")
    parser.add_argument("path", nargs="?", help="Views YAML file (defaults to settings.views_file)")
    args = parser.parse_args()

    sys.exit(asyncio.run(main(args.path or load_settings().views_file)))
