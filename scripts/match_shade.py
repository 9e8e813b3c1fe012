import argparse
import sys
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Add project root
sys.path.append(".")

from app.core.exceptions import InvalidRGBError
from app.services.logic.shade_matcher import shade_matcher
from app.utils.color_math import hex_to_rgb, rgb_to_hex

console = Console()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Match a skin colour against the foundation shade catalog.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--rgb", nargs=3, type=float, metavar=("R", "G", "B"), help="Sampled colour as three numbers")
    source.add_argument("--hex", help="Sampled colour as #RRGGBB")
    return parser.parse_args(argv)


def swatch(rgb) -> str:
    return f"[on {rgb_to_hex(rgb)}]      [/]"


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        rgb = hex_to_rgb(args.hex) if args.hex else args.rgb
        result = shade_matcher.match(rgb)
    except (ValueError, InvalidRGBError) as e:
        console.print(f"[bold red]❌ Invalid colour: {getattr(e, 'detail', e)}[/bold red]")
        return 1

    best = result.best_match
    console.print(Panel.fit(
        f"[bold cyan]Best match: {best.name}[/bold cyan] {swatch(best.rgb)}\n"
        f"Undertone: [yellow]{best.undertone.value}[/yellow]   "
        f"Confidence: [bold]{best.confidence}%[/bold]\n"
        f"Your undertone: [yellow]{result.user_undertone.value}[/yellow]"
    ))

    table = Table(title="Alternative shades")
    table.add_column("Shade", style="cyan")
    table.add_column("RGB")
    table.add_column("Swatch")
    table.add_column("Undertone", style="yellow")
    table.add_column("Distance", justify="right")
    for alt in result.alternative_matches:
        table.add_row(alt.name, str(alt.rgb), swatch(alt.rgb), alt.undertone.value, str(alt.distance))
    console.print(table)

    for tip in result.recommendations:
        console.print(f"  • {tip}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
