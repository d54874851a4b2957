# Common language: Environment/ops probe that surfaces version pins, model and search config.
# Use this before/after upgrades to confirm no silent drift.

from fastapi import APIRouter
from ..core.settings import settings
from ..search.google_cse import allowed_domains
import sys, importlib

router = APIRouter(tags=["health"])

def _ver(modname: str) -> str:
    try:
        m = importlib.import_module(modname)
        return getattr(m, "__version__", "unknown")
    except ImportError:
        return "not-installed"

@router.get("/api/health")
def health():
    return {"ok": True}

@router.get("/healthz")
def healthz():
    return {
        "status": "ok",
        "python": sys.version.split()[0],
        "versions": {
            "fastapi": _ver("fastapi"),
            "uvicorn": _ver("uvicorn"),
            "pydantic": _ver("pydantic"),
            "pydantic_settings": _ver("pydantic_settings"),
            "httpx": _ver("httpx"),
            "selectolax": _ver("selectolax"),
        },
        "model": {
            "ollama_base_url": settings.ollama_base_url,
            "ollama_model": settings.ollama_model,
        },
        "search_config": {
            "allowed_domains": allowed_domains(),
            "max_results": settings.search_max_results,
            # presence only, never the values
            "env_keys_present": {
                "GOOGLE_API_KEY": bool(settings.google_api_key),
                "GOOGLE_CSE_CX": bool(settings.google_cse_cx),
            },
        },
    }
