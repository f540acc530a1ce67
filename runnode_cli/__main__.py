"""`python -m runnode_cli` and the `run-node` console script."""

from .main import main as cli_main


def main() -> int:
    return cli_main()


if __name__ == "__main__":
    raise SystemExit(main())
