"""Assemble the immutable generation snapshot.

Pipeline:
    traits -> fingerprint -> base seed -> (dial re-hash) -> effective seed
           -> LCG -> palette -> palette shift
           -> rule chain -> (manual override) -> GenerationState

This is the only place where auto and manual mode diverge. The snapshot is
rebuilt wholesale whenever traits or options change.
"""

from __future__ import annotations

from dataclasses import dataclass

from datart.core.options import DEFAULT_COMPLEXITY, GenerationOptions
from datart.core.palette import generate_palette, shift_palette
from datart.core.rng import hash_string_to_int, make_rng
from datart.core.rules import DEFAULT_RULES, StyleRules, choose_style
from datart.core.traits import FINGERPRINT_SEPARATOR, UserTraits, build_fingerprint

MANUAL_OVERRIDE_REASON = "manual override"
DIAL_MARKER = "dial:"


@dataclass(frozen=True)
class GenerationState:
    traits: UserTraits
    fingerprint: str
    base_seed: int
    seed: int
    seed_source: str
    seed_dial: int | None
    palette: tuple[str, ...]
    palette_shift: int
    style_id: str
    style_reason: str
    complexity: float

    def to_dict(self) -> dict:
        return {
            "traits": self.traits.to_dict(),
            "fingerprint": self.fingerprint,
            "base_seed": self.base_seed,
            "seed": self.seed,
            "seed_source": self.seed_source,
            "seed_dial": self.seed_dial,
            "palette": list(self.palette),
            "palette_shift": self.palette_shift,
            "style_id": self.style_id,
            "style_reason": self.style_reason,
            "complexity": self.complexity,
        }


def dial_seed(fingerprint: str, dial: int) -> int:
    """Re-hash the fingerprint with a dial suffix; the dial is never the seed."""
    return hash_string_to_int(f"{fingerprint}{FINGERPRINT_SEPARATOR}{DIAL_MARKER}{dial}")


def build_generation_state(traits: UserTraits, options: GenerationOptions,
                           rules: StyleRules = DEFAULT_RULES) -> GenerationState:
    manual = options.mode == "manual"

    fingerprint = build_fingerprint(traits)
    base_seed = hash_string_to_int(fingerprint)

    seed = base_seed
    seed_source = "auto"
    seed_dial = None
    if manual and options.manual_seed is not None:
        seed_dial = options.manual_seed
        seed = dial_seed(fingerprint, seed_dial)
        seed_source = "manualDial"

    rng = make_rng(seed)
    palette = shift_palette(generate_palette(rng), options.palette_shift)

    decision = choose_style(traits, seed, rules)
    if manual and options.manual_style:
        style_id, reason = options.manual_style, MANUAL_OVERRIDE_REASON
    else:
        style_id, reason = decision.style_id, decision.reason

    complexity = options.complexity
    if complexity is None:
        complexity = DEFAULT_COMPLEXITY

    return GenerationState(
        traits=traits,
        fingerprint=fingerprint,
        base_seed=base_seed,
        seed=seed,
        seed_source=seed_source,
        seed_dial=seed_dial,
        palette=palette,
        palette_shift=options.palette_shift,
        style_id=style_id,
        style_reason=reason,
        complexity=complexity,
    )
