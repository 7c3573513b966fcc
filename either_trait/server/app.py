#!/usr/bin/env python3
"""
either-trait FastAPI Server
Provides a REST API over the generation pipeline
"""
from typing import Any, Dict, List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from either_trait import __version__
from either_trait.core.config import GeneratorOptions
from either_trait.core.pipeline import expand_module, generate, generate_from_description
from either_trait.errors import EitherTraitError


# ============================================================================
# Request/Response Models
# ============================================================================

class GenerateRequest(BaseModel):
    source: str
    interface: Optional[str] = None
    allow_generic_methods: bool = True


class GenerateDescriptionRequest(BaseModel):
    description: Dict[str, Any]
    allow_generic_methods: bool = True


class ExpandModuleRequest(BaseModel):
    source: str
    allow_generic_methods: bool = True


class GenerateResponse(BaseModel):
    success: bool
    result: Optional[dict] = None
    error: Optional[dict] = None


class ExpandModuleResponse(BaseModel):
    success: bool
    output: Optional[str] = None
    generated: List[str] = []
    errors: List[dict] = []
    error: Optional[dict] = None


class HealthResponse(BaseModel):
    status: str
    version: str


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="either-trait API",
    description="Generates Either implementations for Python interfaces",
    version=__version__
)

# Editor integrations call the API from other origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _options(allow_generic_methods: bool) -> GeneratorOptions:
    return GeneratorOptions(allow_generic_methods=allow_generic_methods)


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/", response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    return {
        "status": "ok",
        "version": __version__
    }


@app.post("/api/generate", response_model=GenerateResponse)
async def generate_interface(request: GenerateRequest):
    """
    Generate the Either implementation of one interface.

    Example:
        POST /api/generate
        {
            "source": "@either_trait\\nclass Example(Protocol):\\n    ...",
            "interface": "Example"
        }
    """
    try:
        result = generate(request.source, request.interface, _options(request.allow_generic_methods))
    except EitherTraitError as e:
        print(f"[generate] {e}")
        return {"success": False, "error": e.to_dict()}

    return {"success": True, "result": result.to_dict()}


@app.post("/api/generate-description", response_model=GenerateResponse)
async def generate_description(request: GenerateDescriptionRequest):
    """Generate from a structured interface description"""
    try:
        result = generate_from_description(request.description, _options(request.allow_generic_methods))
    except EitherTraitError as e:
        print(f"[generate-description] {e}")
        return {"success": False, "error": e.to_dict()}

    return {"success": True, "result": result.to_dict()}


@app.post("/api/expand-module", response_model=ExpandModuleResponse)
async def expand(request: ExpandModuleRequest):
    """
    Generate implementations for every @either_trait class in a module.

    Interfaces that fail are listed in `errors`; the rest are still generated.
    """
    try:
        expansion = expand_module(request.source, _options(request.allow_generic_methods))
    except EitherTraitError as e:
        print(f"[expand-module] {e}")
        return {"success": False, "error": e.to_dict()}

    return {
        "success": expansion.ok,
        "output": expansion.output,
        "generated": [r.implementation.class_name for r in expansion.results],
        "errors": [failure.to_dict() for failure in expansion.errors]
    }


def main():
    import uvicorn

    print("=" * 60)
    print("either-trait API Server")
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("API docs: http://localhost:8000/docs")
    print("=" * 60)

    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
