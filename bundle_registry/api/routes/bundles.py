from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bundle_registry.api.auth import require_api_key
from bundle_registry.db.session import get_db
from bundle_registry.models import Bundle
from bundle_registry.schemas.bundles import (
    BundleCreateRequest,
    BundleFinalizeRequest,
    BundleItem,
    BundleResponse,
    BundleUpdateRequest,
    FileListResponse,
    FileSummary,
)
from bundle_registry.services.bundle_service import (
    create_bundle,
    finalize_bundle,
    get_bundle,
    list_files,
    update_bundle,
)

router = APIRouter(prefix="/bundles", tags=["bundles"], dependencies=[Depends(require_api_key)])

_TRUTHY_FLAGS = {"1", "true"}


def _to_bundle_response(bundle: Bundle) -> BundleResponse:
    return BundleResponse(ok=True, bundle=BundleItem.model_validate(bundle))


@router.post("", response_model=BundleResponse, response_model_exclude_unset=True)
def create_bundle_entry(
    payload: BundleCreateRequest | None = None,
    db: Session = Depends(get_db),
) -> BundleResponse:
    return _to_bundle_response(create_bundle(db, payload or BundleCreateRequest()))


@router.get("/{code}", response_model=BundleResponse, response_model_exclude_unset=True)
def get_bundle_entry(
    code: str,
    include_files: str | None = Query(default=None, alias="includeFiles"),
    db: Session = Depends(get_db),
) -> BundleResponse:
    bundle = get_bundle(db, code)
    if include_files in _TRUTHY_FLAGS:
        files = [FileSummary.model_validate(item) for item in list_files(db, code)]
        return BundleResponse(ok=True, bundle=BundleItem.model_validate(bundle), files=files)
    return _to_bundle_response(bundle)


@router.get("/{code}/files", response_model=FileListResponse)
def list_bundle_files(code: str, db: Session = Depends(get_db)) -> FileListResponse:
    files = [FileSummary.model_validate(item) for item in list_files(db, code)]
    return FileListResponse(ok=True, files=files)


@router.patch("/{code}", response_model=BundleResponse, response_model_exclude_unset=True)
def patch_bundle(
    code: str,
    payload: BundleUpdateRequest | None = None,
    db: Session = Depends(get_db),
) -> BundleResponse:
    return _to_bundle_response(update_bundle(db, code, payload or BundleUpdateRequest()))


@router.post("/{code}/finalize", response_model=BundleResponse, response_model_exclude_unset=True)
def finalize_bundle_entry(
    code: str,
    payload: BundleFinalizeRequest | None = None,
    db: Session = Depends(get_db),
) -> BundleResponse:
    """Convenience for clients that cannot send PATCH."""
    return _to_bundle_response(finalize_bundle(db, code, payload))
