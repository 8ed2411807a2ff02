"""Command-line entry point: serve the mock API or print its schema."""
import argparse
import logging
import sys
import uvicorn
from grockery.core.config import settings
from grockery.core.loader import ConfigError, load_config_file
from grockery.core.logging import configure_logging
from grockery.generators.compose import generate_schema
from grockery.main import create_app

log = logging.getLogger(__name__)


def cmd_serve(args) -> int:
    config = load_config_file(args.config)
    app = create_app(config, debug=args.debug)
    log.info("Grockery server listening at: http://%s:%d/graphql", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())
    return 0


def cmd_schema(args) -> int:
    config = load_config_file(args.config)
    sys.stdout.write(generate_schema(config.entities))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grockery",
        description="Mock GraphQL API generated from a YAML entity description",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Start the mock GraphQL server")
    serve.add_argument("config", nargs="?", default=settings.config_path, help="Path to the YAML description")
    serve.add_argument("--host", default=settings.api_host)
    serve.add_argument("--port", type=int, default=settings.api_port)
    serve.add_argument("--debug", action="store_true", help="Include tracebacks in GraphQL errors")
    serve.set_defaults(func=cmd_serve)

    schema = subparsers.add_parser("schema", help="Print the generated schema text")
    schema.add_argument("config", nargs="?", default=settings.config_path, help="Path to the YAML description")
    schema.set_defaults(func=cmd_schema)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    # keep stdout clean for printed schema text
    stream = sys.stderr if args.command == "schema" else sys.stdout
    configure_logging(settings.log_level, stream=stream)
    try:
        return args.func(args)
    except (ConfigError, FileNotFoundError) as e:
        log.error("Cannot load %s: %s", args.config, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
