"""polytiling command-line interface."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

from .config import STRICT_CONFIG
from .errors import TilingError
from .io import load_json, save_json

if TYPE_CHECKING:
    from .model import Model

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 1024
DEFAULT_SCALE = 128.0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="polytiling CLI")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List the built-in tilings")

    build = sub.add_parser("build", help="Build a built-in tiling")
    build.add_argument("name", help="Vertex configuration, e.g. 3.4.6.4")
    build.add_argument("--out", dest="output_path", required=True)
    build.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    build.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    build.add_argument("--scale", type=float, default=DEFAULT_SCALE)
    build.add_argument("--no-repeat", action="store_true", help="Stop after the motif")
    build.add_argument("--strict", action="store_true", help="Use tight tolerances (epsilon 1e-9)")
    build.add_argument("--render-out", dest="render_path")
    build.add_argument("--dual-out", dest="dual_path")
    build.add_argument("--labels", action="store_true")
    build.add_argument("--margin", type=float, default=0.1)
    build.add_argument("--line-width", type=float, default=0.1)
    build.add_argument("--diagnose-json", dest="diagnose_json")

    render = sub.add_parser("render", help="Render a saved tiling to PNG")
    render.add_argument("--in", dest="input_path", required=True)
    render.add_argument("--out", dest="output_path", required=True)
    render.add_argument("--dual", action="store_true", help="Render the dual tiling")
    render.add_argument("--labels", action="store_true")
    render.add_argument("--margin", type=float, default=0.1)
    render.add_argument("--line-width", type=float, default=0.1)

    validate = sub.add_parser("validate", help="Validate a saved tiling")
    validate.add_argument("--in", dest="input_path", required=True)
    validate.add_argument("--diagnose", action="store_true")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    try:
        if args.command == "list":
            _cmd_list()
        elif args.command == "build":
            _cmd_build(args)
        elif args.command == "render":
            _cmd_render(args)
        elif args.command == "validate":
            _cmd_validate(args)
    except TilingError as exc:
        print(exc)
        raise SystemExit(1)


def _cmd_list() -> None:
    from .recipes import RECIPES

    for name, builder in RECIPES.items():
        doc = (builder.__doc__ or "").strip().splitlines()
        print(f"{name:<14} {doc[0] if doc else ''}")


def _cmd_build(args) -> None:
    from .recipes import RECIPE_PALETTES, RECIPES, build_recipe

    if args.name not in RECIPES:
        print(f"No recipe named {args.name!r}; choose from {sorted(RECIPES)}")
        raise SystemExit(1)
    model = build_recipe(
        args.name,
        config=STRICT_CONFIG if args.strict else None,
        width=args.width,
        height=args.height,
        scale=args.scale,
        repeat=not args.no_repeat,
    )
    save_json(model, args.output_path)
    palette = RECIPE_PALETTES[args.name]
    if args.render_path:
        from .render import render_png
        render_png(
            model, args.render_path,
            background=palette.background,
            margin=args.margin,
            line_width=args.line_width,
            show_labels=args.labels,
        )
    if args.dual_path:
        from .render import render_dual_png
        render_dual_png(
            model, args.dual_path,
            background=palette.background,
            fill=palette.fill_0,
            stroke=palette.stroke,
            margin=args.margin,
            line_width=args.line_width,
        )
    if args.diagnose_json:
        from .diagnostics import diagnostics_report
        report = diagnostics_report(model)
        Path(args.diagnose_json).write_text(json.dumps(report, indent=2), encoding="utf-8")
    print(f"Saved {args.output_path} ({len(model)} polygons)")


def _cmd_render(args) -> None:
    model = load_json(args.input_path)
    if args.dual:
        from .render import render_dual_png
        render_dual_png(model, args.output_path, margin=args.margin, line_width=args.line_width)
    else:
        from .render import render_png
        render_png(
            model, args.output_path,
            margin=args.margin,
            line_width=args.line_width,
            show_labels=args.labels,
        )
    print(f"Saved {args.output_path}")


def _cmd_validate(args) -> None:
    model = load_json(args.input_path)
    errors = model.validate()
    if errors:
        for error in errors:
            print(error)
        raise SystemExit(1)
    if args.diagnose:
        _print_diagnostics(model)
    print("OK")


def _print_diagnostics(model: "Model") -> None:
    from .diagnostics import diagnostics_report

    report = diagnostics_report(model)
    for key, value in report.items():
        if isinstance(value, dict):
            print(f"{key}:")
            for sub_key, sub_value in value.items():
                print(f"  {sub_key}: {sub_value}")
        else:
            print(f"{key}: {value}")


if __name__ == "__main__":
    main()
