import argparse
import sys
from pathlib import Path

from .config import BOUNDARY_JSON, COUNTRIES_OBJECT, OUTPUT_HTML, PAGE_TITLE, POPULATION_JSON
from .coverage import coverage_report, format_report
from .loader import load_datasets
from .logging_config import setup_logging
from .page import render_page, write_page
from .pipeline import build_map


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="popmap",
        description="Generate an interactive population choropleth world map.",
    )
    parser.add_argument("--world", default=str(BOUNDARY_JSON), help="TopoJSON file or URL")
    parser.add_argument(
        "--population", default=str(POPULATION_JSON), help="population .json/.csv file or URL"
    )
    parser.add_argument("--object", default=COUNTRIES_OBJECT, help="topology object name")
    parser.add_argument("--out", default=str(OUTPUT_HTML))
    parser.add_argument("--title", default=PAGE_TITLE)
    parser.add_argument("--report", action="store_true", help="print countries without data")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", default=None)
    return parser


def run(args: argparse.Namespace) -> int:
    def render(error, world, population):
        if error:
            return 1

        model = build_map(world, population, object_name=args.object)
        page = render_page(
            model.world, model.bound, model.scale, object_name=model.object_name, title=args.title
        )
        out = write_page(Path(args.out), page)

        if args.report:
            print(format_report(coverage_report(model.features, model.index)))

        print("\n Done!")
        print(f"  Wrote: {out}")
        print(f'  Open: "{out.resolve()}"\n')
        return 0

    return load_datasets(args.world, args.population, render)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
