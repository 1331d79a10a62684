"""Command line entry point: generate a backend from a prompt, or serve the current one."""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional
from genbackend.core.config import settings
from genbackend.core.logging import configure_logging
from genbackend.core.state import ModelStore
from genbackend.generators.artifacts import write_artifacts
from genbackend.pipeline.assembler import assemble
from genbackend.pipeline.translator import check_inputs

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genbackend",
        description="Generate backend services from natural-language descriptions",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a backend from a prompt")
    gen.add_argument("prompt", help="Natural-language description of the backend")
    gen.add_argument("-o", "--output", default=settings.output_dir, help="Output directory")
    gen.add_argument("-m", "--model", default=None, help=f"Model to use (default: {settings.llm_model})")
    gen.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    gen.add_argument("-s", "--serve", action="store_true", help="Start the server after generation")
    gen.add_argument("--host", default=settings.api_host)
    gen.add_argument("--port", type=int, default=settings.api_port)

    serve = sub.add_parser("serve", help="Serve the last generated backend")
    serve.add_argument("--host", default=settings.api_host)
    serve.add_argument("--port", type=int, default=settings.api_port)
    serve.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


def serve(store: ModelStore, host: str, port: int) -> None:
    import uvicorn
    from genbackend.main import create_app

    app = create_app(config=settings, store=store)
    log.info("Server running at http://%s:%d/v1/", host, port)
    uvicorn.run(app, host=host, port=port)


def generate(args: argparse.Namespace) -> int:
    error = check_inputs(args.prompt, settings.openai_api_key)
    if error:
        print(f"Error: {error.message}", file=sys.stderr)
        return 1

    result = asyncio.run(assemble(args.prompt, settings, model=args.model))
    if not result.ok:
        print(f"Error: {result.message}", file=sys.stderr)
        return 1

    model = result.model
    out_dir = Path(args.output)
    files = asyncio.run(write_artifacts(model, out_dir, templates_dir=settings.templates_dir))

    store = ModelStore(settings.state_file)
    store.replace(model)

    print(f"Generated backend: {model.name}")
    print(f"  Nodes:     {model.node_count}")
    print(f"  Workflows: {model.workflow_count}")
    print(f"  Endpoints: {model.endpoint_count}")
    print(f"  Files:     {len(files)} written to {out_dir}")

    if args.serve:
        serve(store, args.host, args.port)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    if args.command == "serve":
        store = ModelStore(settings.state_file)
        if store.load() is None:
            log.warning("No generated backend found at %s; read endpoints will return 404", settings.state_file)
        serve(store, args.host, args.port)
        return 0
    return generate(args)


if __name__ == "__main__":
    sys.exit(main())
