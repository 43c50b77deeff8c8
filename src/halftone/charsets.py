# Ramps run from sparsest (light) to densest (dark) glyph

DEFAULT = " .,☆:~;*o✿O@@"

CLASSIC = " .:-=+*#%@"

# Block elements: light, medium and dark shade, full block
BLOCKS = " ░▒▓█"

# Dots and circles of increasing weight
DOTS = " ·•○◎●"

RAMPS = {
    "default": DEFAULT,
    "classic": CLASSIC,
    "blocks": BLOCKS,
    "dots": DOTS,
}


def resolve_ramp(name_or_ramp: str) -> str:
    """Return a named preset, or the argument itself when it isn't a preset name."""
    return RAMPS.get(name_or_ramp, name_or_ramp)
