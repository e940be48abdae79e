"""
Command line entry point.

    ponder-codegen codegen --root ./my-project
    ponder-codegen import-subgraph ./my-subgraph --root ./my-project
"""
import argparse
import asyncio
import sys

from codegen.usecases import ImportSubgraphUseCase, RunCodegenUseCase
from core.container import build_container
from core.environment.config import Settings
from core.exceptions import BaseCustomException


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ponder-codegen",
        description="Generate entity and handler types for a ponder project"
    )
    parser.add_argument("--env-file", default=None, help="Settings file to read instead of .env")
    subparsers = parser.add_subparsers(dest="command", required=True)

    codegen = subparsers.add_parser("codegen", help="Generate types into the generated directory")
    codegen.add_argument("--root", default=".", help="Project directory (default: current directory)")

    import_subgraph = subparsers.add_parser("import-subgraph", help="Bootstrap a project from a subgraph")
    import_subgraph.add_argument("subgraph_dir", help="Subgraph directory holding the manifest")
    import_subgraph.add_argument("--root", default=".", help="Target project directory (default: current directory)")

    return parser


async def run(args: argparse.Namespace) -> None:
    settings = Settings(_env_file=args.env_file) if args.env_file else None
    container = build_container(settings=settings)
    try:
        async with container() as request_container:
            if args.command == "codegen":
                use_case = await request_container.get(RunCodegenUseCase, component="codegen")
                paths = await use_case(root_dir=args.root)
                for path in paths:
                    print(f"Generated {path}")
            else:
                use_case = await request_container.get(ImportSubgraphUseCase, component="codegen")
                result = await use_case(subgraph_dir=args.subgraph_dir, root_dir=args.root)
                print(f"Imported sources {', '.join(result.sources)} on {', '.join(result.networks)}")
    finally:
        await container.close()


def main(argv: list[str] | None = None) -> int:
    args = build_argument_parser().parse_args(argv)
    try:
        asyncio.run(run(args))
    except BaseCustomException as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
