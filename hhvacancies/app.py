import argparse
from pathlib import Path
from typing import Optional

from .env import load_env

from . import __version__
from .client import DEFAULT_PER_PAGE, HhClient
from .config import ClientConfig
from .logger import get_logger
from .result import Result, describe, is_success
from .retry import retry_result
from .schema import Area
from .search import SearchFilter


def build_client(args: argparse.Namespace) -> HhClient:
    config = ClientConfig.from_env().with_overrides(
        base_url=args.base_url,
        timeout=args.timeout,
    )
    return HhClient(config)


def run(args: argparse.Namespace, call) -> Result:
    """Run one client call, honouring --retries. Exits on failure."""
    with build_client(args) as client:
        result = retry_result(lambda: call(client), max_retries=args.retries, base_delay=1.0)
    if not is_success(result):
        raise SystemExit(f"Request failed: {describe(result)}")
    return result


def _salary_text(salary) -> str:
    if salary is None:
        return "salary not specified"
    parts = []
    if salary.salary_from is not None:
        parts.append(f"from {salary.salary_from}")
    if salary.salary_to is not None:
        parts.append(f"to {salary.salary_to}")
    if salary.currency:
        parts.append(salary.currency)
    return " ".join(parts) or "salary not specified"


def cmd_search(args: argparse.Namespace) -> None:
    search_filter = SearchFilter(
        text=args.text or "",
        salary=args.salary or "",
        industry_id=args.industry or "",
        region_id=args.area or "",
        only_with_salary=args.only_with_salary,
    )
    result = run(args, lambda c: c.search_vacancies(search_filter, page=args.page, per_page=args.per_page))
    page = result.payload
    print(f"Found {page.found} vacancies (page {page.page + 1} of {max(page.pages, 1)}):\n")
    for v in page.items:
        print(f"[{v.id}] {v.name}")
        print(f"  Employer: {v.employer_name or '-'}")
        print(f"  Area: {v.area.name if v.area else '-'}")
        print(f"  Salary: {_salary_text(v.salary)}")
        if v.url:
            print(f"  URL: {v.url}")
        print()


def cmd_vacancy(args: argparse.Namespace) -> None:
    result = run(args, lambda c: c.get_vacancy(args.id))
    v = result.payload
    print(f"{v.name} [{v.id}]")
    print(f"Employer: {v.employer_name or '-'}")
    print(f"Area: {v.area.name if v.area else '-'}")
    print(f"Salary: {_salary_text(v.salary)}")
    print(f"Experience: {v.experience or '-'}")
    print(f"Employment: {v.employment or '-'}")
    print(f"Schedule: {v.schedule or '-'}")
    if v.key_skills:
        print(f"Skills: {', '.join(v.key_skills)}")
    if v.url:
        print(f"URL: {v.url}")
    text = v.description_text()
    if text:
        print()
        print(text)


def _print_tree(entries, depth: int, max_depth: Optional[int]) -> None:
    for entry in entries:
        print(f"{'  ' * depth}{entry.id}  {entry.name}")
        children = entry.areas if isinstance(entry, Area) else entry.industries
        if children and (max_depth is None or depth + 1 < max_depth):
            _print_tree(children, depth + 1, max_depth)


def cmd_industries(args: argparse.Namespace) -> None:
    result = run(args, lambda c: c.get_industries())
    _print_tree(result.payload.items, 0, args.depth)


def cmd_areas(args: argparse.Namespace) -> None:
    if args.id is not None:
        result = run(args, lambda c: c.get_areas_by_id(args.id))
    else:
        result = run(args, lambda c: c.get_areas())
    _print_tree(result.payload.items, 0, args.depth)


def main(argv=None):
    # Load .env if present (HH_ACCESS_TOKEN, HH_BASE_URL, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="hhvacancies", description="hh.ru vacancy search client")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--base-url", help="API base URL (or set HH_BASE_URL)")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds (or set HH_TIMEOUT)")
    parser.add_argument("--retries", type=int, default=0, help="Retries on transient failures (default 0)")
    parser.add_argument("--log-dir", help="Also write a debug log file into this directory")
    parser.add_argument("--stats", action="store_true", help="Log request metrics when the command finishes")

    subparsers = parser.add_subparsers(dest="command")
    srch = subparsers.add_parser("search", help="Search vacancies")
    srch.add_argument("--text", help="Free-text query (empty matches everything)")
    srch.add_argument("--salary", help="Expected salary")
    srch.add_argument("--industry", help="Industry id")
    srch.add_argument("--area", help="Region id")
    srch.add_argument("--only-with-salary", action="store_true", help="Only vacancies with a salary")
    srch.add_argument("--page", type=int, default=0, help="Page number, from 0")
    srch.add_argument("--per-page", type=int, default=DEFAULT_PER_PAGE, help=f"Page size (default {DEFAULT_PER_PAGE})")
    srch.set_defaults(func=cmd_search)

    vac = subparsers.add_parser("vacancy", help="Show one vacancy")
    vac.add_argument("--id", required=True, help="Vacancy id")
    vac.set_defaults(func=cmd_vacancy)

    ind = subparsers.add_parser("industries", help="List industries")
    ind.add_argument("--depth", type=int, help="Limit nesting depth")
    ind.set_defaults(func=cmd_industries)

    ar = subparsers.add_parser("areas", help="List areas")
    ar.add_argument("--id", help="Only this area and its sub-areas")
    ar.add_argument("--depth", type=int, help="Limit nesting depth")
    ar.set_defaults(func=cmd_areas)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if args.log_dir:
        get_logger().add_file_handler(Path(args.log_dir))

    if hasattr(args, "func"):
        try:
            args.func(args)
        except ValueError as e:
            raise SystemExit(str(e))
        finally:
            if args.stats:
                get_logger().log_metrics_summary()
        return

    parser.print_help()


if __name__ == "__main__":
    main()
