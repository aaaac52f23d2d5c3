"""Read-only JSON export of a bundle with its files embedded."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bundle_registry.api.auth import require_api_key
from bundle_registry.db.session import get_db
from bundle_registry.schemas.bundles import BundleItem, ExportedBundle, ExportResponse, FileSummary
from bundle_registry.services.bundle_service import get_bundle, list_files

router = APIRouter(prefix="/export", tags=["export"], dependencies=[Depends(require_api_key)])


@router.get("/{code}", response_model=ExportResponse)
def export_bundle(code: str, db: Session = Depends(get_db)) -> ExportResponse:
    bundle = get_bundle(db, code)
    files = [FileSummary.model_validate(item) for item in list_files(db, code)]
    exported = ExportedBundle(**BundleItem.model_validate(bundle).model_dump(), files=files)
    return ExportResponse(ok=True, bundle=exported)
