"""FastAPI web application for DepAdd."""

from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, model_validator

from depadd.add import prepare_add
from depadd.config import load_settings
from depadd.errors import AddError
from depadd.options import find_conflict

app = FastAPI(
    title="DepAdd",
    description="Build validated add-dependency requests for a manifest",
    version="0.1.0",
)


class AddRequest(BaseModel):
    """Request model mirroring the ``depadd`` command line."""
    crates: list[str]
    package: list[str] = []
    features: Optional[list[str]] = None
    default_features: bool = False
    no_default_features: bool = False
    optional: bool = False
    no_optional: bool = False
    rename: Optional[str] = None
    registry: Optional[str] = None
    git: Optional[str] = None
    branch: Optional[str] = None
    tag: Optional[str] = None
    rev: Optional[str] = None
    dev: bool = False
    build: bool = False
    target: Optional[str] = None
    unstable_options: bool = False
    manifest_path: Optional[str] = None
    offline: bool = False
    dry_run: bool = True

    @model_validator(mode="after")
    def reject_conflicting_options(self) -> "AddRequest":
        conflict = find_conflict(
            default_features=self.default_features,
            no_default_features=self.no_default_features,
            optional=self.optional,
            no_optional=self.no_optional,
            dev=self.dev,
            build=self.build,
            registry=self.registry,
            git=self.git,
            branch=self.branch,
            tag=self.tag,
            rev=self.rev,
        )
        if conflict:
            raise ValueError(conflict)
        return self


class SectionResponse(BaseModel):
    kind: str
    target: Optional[str] = None


class AddResponse(BaseModel):
    """Response model handed to the manifest editor."""
    package: str
    manifest_path: Optional[str] = None
    dry_run: bool
    offline: bool
    section: SectionResponse
    dependencies: list[dict]


@app.get("/favicon.ico")
async def favicon():
    """Return a simple favicon to prevent 404 errors."""
    # Simple 1x1 transparent PNG
    favicon_data = (
        b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01'
        b'\x08\x02\x00\x00\x00\x90wS\xde\x00\x00\x00\tpHYs\x00\x00\x0b\x13\x00\x00'
        b'\x0b\x13\x01\x00\x9a\x9c\x18\x00\x00\x00\x12IDAT\x08\x1dc\xf8\x00\x00'
        b'\x00\x01\x00\x01u\x02\x81\xa3\x00\x00\x00\x00IEND\xaeB`\x82'
    )
    return Response(content=favicon_data, media_type="image/png")


@app.post("/api/add", response_model=AddResponse)
async def add_dependencies(request: AddRequest):
    """Validate an add request and return the structured request set."""
    try:
        if not request.crates:
            raise HTTPException(status_code=400, detail="No dependencies provided")

        settings = load_settings()
        packages = request.package or ([settings.package] if settings.package else [])

        options = prepare_add(
            request.crates,
            packages,
            features=request.features,
            default_features_flag=request.default_features,
            no_default_features_flag=request.no_default_features,
            optional_flag=request.optional,
            no_optional_flag=request.no_optional,
            rename=request.rename,
            registry=request.registry,
            git=request.git,
            branch=request.branch,
            tag=request.tag,
            rev=request.rev,
            dev=request.dev,
            build=request.build,
            target=request.target,
            unstable_options=request.unstable_options or settings.unstable_options,
            dry_run=request.dry_run,
            manifest_path=request.manifest_path,
            offline=request.offline,
        )

        return AddResponse(**options.to_dict())

    except HTTPException:
        # Re-raise HTTP exceptions (don't convert to 500)
        raise
    except AddError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error processing request: {str(e)}")
