#!/usr/bin/env python3
"""Data-driven generative art -- CLI Interface.

Builds the generation state for a set of visitor traits, then prints it,
dumps it as JSON, or exports a Pillow preview:

1. Traits (flags, or defaults) -> fingerprint -> seed -> palette -> style
2. The chosen style turns seed, palette and complexity into primitives
3. Optional: render to PNG, or sweep complexity into a frame sequence

Usage:
    python -m datart.main [--timezone Europe/Berlin] [--mode manual --dial 7]
                          [--style fern] [--export out.png] [--sweep 60]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from datart.core.generation import GenerationState, build_generation_state
from datart.core.options import GenerationOptions, MODES, sanitize_options
from datart.core.rules import DEFAULT_RULES, load_rules
from datart.core.traits import IpInfo, UserTraits, apply_ip_info, default_traits
from datart.styles.registry import StyleRegistry, build_registry
from datart.utils.logger import setup_logging

OUTPUT_DIR = Path("output")


def parse_args(argv=None):
    base = default_traits()
    p = argparse.ArgumentParser(description="Deterministic generative art from visitor traits")

    t = p.add_argument_group("traits")
    t.add_argument("--timezone", default=base.timezone, help="IANA time zone (default: UTC)")
    t.add_argument("--user-agent", default=base.user_agent, help="User agent string")
    t.add_argument("--language", default=base.language, help="Language tag (default: en-US)")
    t.add_argument("--width", type=int, default=base.screen_width, help="Screen width in px")
    t.add_argument("--height", type=int, default=base.screen_height, help="Screen height in px")
    t.add_argument("--dpr", type=float, default=base.device_pixel_ratio, help="Device pixel ratio")
    t.add_argument("--dark", action="store_true", help="Prefer dark colour scheme")

    ip = p.add_argument_group("ip info (all optional; --ip enables the group)")
    ip.add_argument("--ip", default=None, help="Public IP address")
    ip.add_argument("--city", default=None)
    ip.add_argument("--region", default=None)
    ip.add_argument("--country", default=None)
    ip.add_argument("--continent", default=None, help="Continent code, e.g. EU")

    g = p.add_argument_group("generation")
    g.add_argument("--mode", choices=MODES, default="auto", help="Seed/style mode (default: auto)")
    g.add_argument("--dial", type=float, default=None, help="Manual seed dial 0-100 (manual mode)")
    g.add_argument("--style", default=None, help="Manual style id (manual mode)")
    g.add_argument("--complexity", type=float, default=50.0, help="Complexity 0-100 (default: 50)")
    g.add_argument("--palette-shift", type=int, default=0, help="Rotate the palette left by N")
    g.add_argument("--style-options", default=None,
                   help="JSON object of per-style overrides, e.g. '{\"ring_count\": 12}'")
    g.add_argument("--rules", type=Path, default=None, help="Style rules JSON file")

    o = p.add_argument_group("output")
    o.add_argument("--json", action="store_true", help="Print state and primitives as JSON")
    o.add_argument("--export", type=Path, default=None, help="Write a PNG preview to this path")
    o.add_argument("--size", type=int, default=512, help="Preview size in pixels (default: 512)")
    o.add_argument("--sweep", type=int, default=0,
                   help="Export N frames of a complexity sweep into output/")
    o.add_argument("--list-styles", action="store_true", help="List registered styles and exit")
    o.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return p.parse_args(argv)


def traits_from_args(args) -> UserTraits:
    traits = UserTraits(
        timezone=args.timezone,
        user_agent=args.user_agent,
        language=args.language,
        screen_width=args.width,
        screen_height=args.height,
        device_pixel_ratio=args.dpr,
        dark_mode=args.dark,
    )
    if args.ip is None:
        return traits
    return apply_ip_info(traits, IpInfo(
        ip=args.ip, city=args.city, region=args.region,
        country=args.country, continent_code=args.continent,
    ))


def options_from_args(args, registry: StyleRegistry) -> GenerationOptions:
    raw = GenerationOptions(
        mode=args.mode,
        manual_seed=args.dial,
        manual_style=args.style,
        complexity=args.complexity,
        palette_shift=args.palette_shift,
    )
    return sanitize_options(raw, registry.ids())


def print_state(state: GenerationState, registry: StyleRegistry) -> None:
    label = registry.resolve(state.style_id).label
    print(f"=== {label} ===")
    print(f"Fingerprint : {state.fingerprint}")
    dial = f" (dial {state.seed_dial})" if state.seed_dial is not None else ""
    print(f"Seed        : {state.seed} [{state.seed_source}{dial}], base {state.base_seed}")
    print(f"Style       : {state.style_id} -- {state.style_reason}")
    print(f"Complexity  : {state.complexity:g}")
    print(f"Palette     : (shift {state.palette_shift})")
    for i, color in enumerate(state.palette):
        print(f"  {i}: {color}")


def _export_sweep(args, traits, options, rules, registry, style_options) -> None:
    from datart.render import render_artwork
    from datart.sweep import ComplexitySweep

    OUTPUT_DIR.mkdir(exist_ok=True)
    sweep = ComplexitySweep()
    for i, frame_options in enumerate(sweep.frames(options, args.sweep)):
        state = build_generation_state(traits, frame_options, rules)
        img = render_artwork(registry.generate(state, style_options), args.size)
        path = OUTPUT_DIR / f"sweep_{i:04d}.png"
        img.save(path)
        print(f"  Frame {i} (complexity {state.complexity:.1f}) saved to: {path}")


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    registry = build_registry()

    if args.list_styles:
        for entry in registry:
            print(f"{entry.id:<14} {entry.label}")
        return 0

    try:
        rules = load_rules(args.rules) if args.rules else DEFAULT_RULES
        rules.validate(registry.ids())
    except (OSError, ValueError) as e:
        print(f"Error: invalid style rules: {e}", file=sys.stderr)
        return 2

    traits = traits_from_args(args)
    options = options_from_args(args, registry)
    state = build_generation_state(traits, options, rules)

    try:
        style_options = json.loads(args.style_options) if args.style_options else None
        style_options = registry.options_from_dict(state.style_id, style_options)
        artwork = registry.generate(state, style_options)
    except (TypeError, ValueError) as e:
        print(f"Error: invalid style options: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps({"state": state.to_dict(), "artwork": artwork.to_dict()}, indent=2))
    else:
        print_state(state, registry)
        print(f"Primitives  : {len(artwork)} ({artwork.frame} frame, {artwork.blend} blend)")

    if args.export is not None:
        from datart.render import render_artwork

        img = render_artwork(artwork, args.size)
        args.export.parent.mkdir(parents=True, exist_ok=True)
        img.save(args.export)
        print(f"Preview ({args.size}x{args.size}) saved to: {args.export}",
              file=sys.stderr if args.json else sys.stdout)

    if args.sweep > 0:
        _export_sweep(args, traits, options, rules, registry, style_options)

    return 0


if __name__ == "__main__":
    sys.exit(main())
