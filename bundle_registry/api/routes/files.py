from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bundle_registry.api.auth import require_api_key
from bundle_registry.db.session import get_db
from bundle_registry.schemas.bundles import FileCreateRequest, FileItem, FileResponse
from bundle_registry.services.bundle_service import add_file

router = APIRouter(prefix="/files", tags=["files"], dependencies=[Depends(require_api_key)])


@router.post("", response_model=FileResponse)
def add_file_entry(
    payload: FileCreateRequest | None = None,
    db: Session = Depends(get_db),
) -> FileResponse:
    entry = add_file(db, payload or FileCreateRequest())
    return FileResponse(ok=True, file=FileItem.model_validate(entry))
