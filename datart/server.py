"""Data-driven generative art -- JSON API Server.

Every request carries its own traits and options; nothing is stored
between requests except the registry and the style rules, both loaded
and validated once at start-up.

Launch:
    python -m datart.server
    # or: uvicorn datart.server:app --reload

Set ``DATART_RULES=/path/rules.json`` to replace the default style rules.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from datart.core.generation import build_generation_state
from datart.core.options import DEFAULT_COMPLEXITY, GenerationOptions, sanitize_options
from datart.core.rules import DEFAULT_RULES, load_rules
from datart.core.traits import IpInfo, UserTraits, default_traits
from datart.styles.registry import build_registry
from datart.utils.logger import setup_logging

logger = logging.getLogger(__name__)

RULES_PATH = os.environ.get("DATART_RULES")

registry = build_registry()
rules = (load_rules(RULES_PATH) if RULES_PATH else DEFAULT_RULES).validate(registry.ids())

app = FastAPI(title="Datart")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

_DEFAULT_TRAITS = default_traits()


class IpInfoModel(BaseModel):
    ip: str
    city: str | None = None
    region: str | None = None
    country: str | None = None
    continent_code: str | None = None


class TraitsModel(BaseModel):
    timezone: str = _DEFAULT_TRAITS.timezone
    user_agent: str = _DEFAULT_TRAITS.user_agent
    language: str = _DEFAULT_TRAITS.language
    screen_width: int = _DEFAULT_TRAITS.screen_width
    screen_height: int = _DEFAULT_TRAITS.screen_height
    device_pixel_ratio: float = _DEFAULT_TRAITS.device_pixel_ratio
    dark_mode: bool = _DEFAULT_TRAITS.dark_mode
    ip_info: IpInfoModel | None = None

    def to_traits(self) -> UserTraits:
        ip = IpInfo(**self.ip_info.model_dump()) if self.ip_info else None
        return UserTraits(
            timezone=self.timezone,
            user_agent=self.user_agent,
            language=self.language,
            screen_width=self.screen_width,
            screen_height=self.screen_height,
            device_pixel_ratio=self.device_pixel_ratio,
            dark_mode=self.dark_mode,
            ip_info=ip,
        )


class OptionsModel(BaseModel):
    mode: str = "auto"
    manual_seed: float | None = None
    manual_style: str | None = None
    complexity: float | None = DEFAULT_COMPLEXITY
    palette_shift: int = 0

    def to_options(self) -> GenerationOptions:
        raw = GenerationOptions(
            mode=self.mode,
            manual_seed=self.manual_seed,
            manual_style=self.manual_style,
            complexity=self.complexity,
            palette_shift=self.palette_shift,
        )
        return sanitize_options(raw, registry.ids())


class StateRequest(BaseModel):
    traits: TraitsModel = Field(default_factory=TraitsModel)
    options: OptionsModel = Field(default_factory=OptionsModel)


class ArtworkRequest(StateRequest):
    style_options: dict | None = None


def _build_state(req: StateRequest):
    return build_generation_state(req.traits.to_traits(), req.options.to_options(), rules)


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------

@app.get("/api/health")
def api_health():
    return JSONResponse({"status": "ok", "styles": len(registry)})


@app.get("/api/styles")
def api_styles():
    return JSONResponse({
        "styles": [entry.to_dict() for entry in registry],
        "rules": rules.to_dict(),
    })


@app.post("/api/state")
def api_state(req: StateRequest):
    return JSONResponse(_build_state(req).to_dict())


@app.post("/api/artwork")
def api_artwork(req: ArtworkRequest):
    gen_state = _build_state(req)
    try:
        style_options = registry.options_from_dict(gen_state.style_id, req.style_options)
        artwork = registry.generate(gen_state, style_options)
    except (TypeError, ValueError) as e:
        return JSONResponse({"error": str(e)}, status_code=422)
    logger.info("Generated %s (%d primitives) for seed %d",
                artwork.style_id, len(artwork), gen_state.seed)
    return JSONResponse({"state": gen_state.to_dict(), "artwork": artwork.to_dict()})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn
    setup_logging("INFO")
    print("Starting server at http://localhost:8000")
    uvicorn.run(app, host="0.0.0.0", port=8000)
