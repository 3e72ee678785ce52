from pathlib import Path

from polytiling.recipes import RECIPES, RECIPE_PALETTES, build_recipe
from polytiling.render import render_dual_png, render_png

ROOT = Path(__file__).parents[1]


def main() -> None:
    output_dir = ROOT / "example_outputs"
    output_dir.mkdir(parents=True, exist_ok=True)

    for name in RECIPES:
        palette = RECIPE_PALETTES[name]
        model = build_recipe(name)
        render_png(model, output_dir / f"{name}.png", background=palette.background)
        render_dual_png(
            model,
            output_dir / f"{name}.dual.png",
            background=palette.background,
            fill=palette.fill_0,
            stroke=palette.stroke,
        )
        print(f"{name}: {len(model)} polygons")

    print("Saved example PNGs to", output_dir)


if __name__ == "__main__":
    main()
