from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


def _int_to_str(value: Any) -> Any:
    # Ids and chat ids are often sent as JSON numbers; 0 counts as absent.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value) if value else ""
    return value


LooseStr = Annotated[str | None, BeforeValidator(_int_to_str)]


class BundleCreateRequest(BaseModel):
    id: LooseStr = None
    owner_id: LooseStr = None
    owner_name: LooseStr = None
    header_chat_id: LooseStr = None
    header_msg_id: int | None = None
    created_at: int | None = None


class BundleUpdateRequest(BaseModel):
    """Fields a client may overwrite on an existing bundle.

    Only the fields present in the request body are written, so an explicit
    ``null`` clears a column while an omitted key leaves it untouched.
    """

    finalized_at: int | None = None
    files_count: int | None = None
    header_msg_id: int | None = None
    header_chat_id: LooseStr = None
    owner_name: LooseStr = None
    owner_id: LooseStr = None

    def present_fields(self) -> dict[str, Any]:
        return self.model_dump(include=self.model_fields_set)


class BundleFinalizeRequest(BaseModel):
    finalized_at: int | None = None
    files_count: int | None = None


class FileCreateRequest(BaseModel):
    code: LooseStr = None
    channel_msg_id: int | None = None
    header_chat_id: LooseStr = None
    caption: LooseStr = None
    added_at: int | None = None


class BundleItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str | None
    owner_name: str | None
    header_chat_id: str | None
    header_msg_id: int | None
    created_at: int | None
    finalized_at: int | None
    files_count: int | None


class FileItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    channel_msg_id: int | None
    header_chat_id: str | None
    caption: str | None
    added_at: int | None


class FileSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    channel_msg_id: int | None
    caption: str | None
    added_at: int | None


class ExportedBundle(BundleItem):
    files: list[FileSummary]


class BundleResponse(BaseModel):
    ok: bool = True
    bundle: BundleItem
    # Only serialized when the caller asked for the file list.
    files: list[FileSummary] | None = None


class FileResponse(BaseModel):
    ok: bool = True
    file: FileItem


class FileListResponse(BaseModel):
    ok: bool = True
    files: list[FileSummary]


class ExportResponse(BaseModel):
    ok: bool = True
    bundle: ExportedBundle


class HealthResponse(BaseModel):
    ok: bool = True
    time: int
