import argparse
import json
import pathlib
import sys

from fastapi import FastAPI

from .agents.analyst import Analyst, InvalidInput, samples_from_pairs
from .api.routes import router
from .evaluation.report import export_csv, plot_growth, render_text
from .schemas import ClassifyRequest
from .utils.logger import get_logger

log = get_logger("CLI")

def make_app():
    app = FastAPI(title="bigoprof API")
    app.include_router(router)
    return app

# Create the app instance for uvicorn
app = make_app()

def _load_request(path: pathlib.Path) -> ClassifyRequest:
    raw = json.loads(path.read_text())
    if isinstance(raw, list):
        raw = {"samples": raw}
    return ClassifyRequest.model_validate(raw)

def _cli(argv=None) -> int:
    p = argparse.ArgumentParser(description="Classify measured growth into a Big O class")
    p.add_argument("--samples_json", required=True,
                   help='[[size, cost], ...] or {"samples": [...]}')
    p.add_argument("--format", choices=["text", "json"], default="text")
    p.add_argument("--csv", type=pathlib.Path, help="also write the samples table as CSV")
    p.add_argument("--plot", type=pathlib.Path, help="also write a log-log growth plot")
    args = p.parse_args(argv)

    try:
        request = _load_request(pathlib.Path(args.samples_json))
        result = Analyst().run(samples_from_pairs(request.samples))
    except InvalidInput as e:
        log.error(f"Invalid input ({e.code}): {e}")
        print(f"error: {e}", file=sys.stderr)
        return 2
    except (ValueError, OSError) as e:
        log.error(f"Could not read samples from {args.samples_json}: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.csv:
        export_csv(result, args.csv)
    if args.plot:
        plot_growth(result, args.plot)

    if args.format == "json":
        print(json.dumps(result.to_record(), indent=2))
    else:
        print(render_text(result))
    return 0

def main():
    sys.exit(_cli())

if __name__ == "__main__":
    main()
