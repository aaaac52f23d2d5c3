from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from bundle_registry.core.error_codes import ErrorCode
from bundle_registry.core.errors import ApiError
from bundle_registry.core.security import generate_bundle_id, now_ms
from bundle_registry.models import Bundle, BundleFile
from bundle_registry.schemas.bundles import (
    BundleCreateRequest,
    BundleFinalizeRequest,
    BundleUpdateRequest,
    FileCreateRequest,
)

logger = logging.getLogger(__name__)


def _raise_not_found() -> None:
    raise ApiError(status_code=404, code=ErrorCode.BUNDLE_NOT_FOUND, message="Bundle not found")


def create_bundle(db: Session, request: BundleCreateRequest) -> Bundle:
    requested_id = (request.id or "").strip()
    bundle = Bundle(
        id=requested_id or generate_bundle_id(8),
        owner_id=request.owner_id or "",
        owner_name=request.owner_name or "",
        header_chat_id=request.header_chat_id or "",
        header_msg_id=request.header_msg_id or 0,
        created_at=request.created_at or now_ms(),
        files_count=0,
    )
    db.add(bundle)
    # A duplicate id fails here with IntegrityError and surfaces as a store error.
    db.commit()
    db.refresh(bundle)
    logger.info("Created bundle %s", bundle.id)
    return bundle


def add_file(db: Session, request: FileCreateRequest) -> BundleFile:
    if not request.code:
        raise ApiError(status_code=400, code=ErrorCode.VALIDATION_ERROR, message="Missing code")

    entry = BundleFile(
        code=request.code,
        channel_msg_id=request.channel_msg_id,
        header_chat_id=request.header_chat_id or "",
        caption=request.caption or "",
        added_at=request.added_at or now_ms(),
    )
    db.add(entry)
    db.flush()
    # Matches no row when the bundle does not exist; the file is kept regardless.
    db.execute(
        update(Bundle)
        .where(Bundle.id == request.code)
        .values(files_count=Bundle.files_count + 1)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    db.refresh(entry)
    return entry


def get_bundle(db: Session, code: str) -> Bundle:
    bundle = db.get(Bundle, code)
    if not bundle:
        _raise_not_found()
    return bundle


def list_files(db: Session, code: str) -> list[BundleFile]:
    return list(
        db.execute(select(BundleFile).where(BundleFile.code == code).order_by(BundleFile.id.asc())).scalars().all()
    )


def _apply_update(db: Session, code: str, values: dict) -> Bundle:
    result = db.execute(
        update(Bundle).where(Bundle.id == code).values(**values).execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        _raise_not_found()
    db.commit()
    # Re-read the row rather than trusting any identity-map copy.
    bundle = db.execute(select(Bundle).where(Bundle.id == code).execution_options(populate_existing=True)).scalar_one()
    return bundle


def update_bundle(db: Session, code: str, request: BundleUpdateRequest) -> Bundle:
    values = request.present_fields()
    if not values:
        raise ApiError(status_code=400, code=ErrorCode.VALIDATION_ERROR, message="No allowed fields provided")
    return _apply_update(db, code, values)


def finalize_bundle(db: Session, code: str, request: BundleFinalizeRequest | None) -> Bundle:
    request = request or BundleFinalizeRequest()
    values: dict = {"finalized_at": request.finalized_at or now_ms()}
    if request.files_count is not None:
        values["files_count"] = request.files_count

    bundle = _apply_update(db, code, values)
    logger.info("Finalized bundle %s with files_count=%s", bundle.id, bundle.files_count)
    return bundle
