"""Table CRUD endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from src.api.dependencies import get_crud_service
from src.api.models import (
    FieldSpecResponse,
    OperationResponse,
    RecordRequest,
    RowSetResponse,
    TableResponse,
)
from src.api.response import check_operation_result, http_error
from src.services.crud.errors import CrudError
from src.services.crud.service import CrudService

router = APIRouter()


@router.get("", response_model=list[TableResponse])
def list_tables(svc: CrudService = Depends(get_crud_service)) -> list[TableResponse]:
    """List the tables available for editing."""
    return [TableResponse.from_ref(ref) for ref in svc.list_tables()]


@router.get("/{table_name}/rows", response_model=RowSetResponse)
def get_rows(
    table_name: str,
    svc: CrudService = Depends(get_crud_service),
) -> RowSetResponse:
    """All rows of a table ordered by primary key."""
    try:
        return RowSetResponse.from_row_set(svc.get_rows(table_name))
    except CrudError as e:
        raise http_error(e) from e


@router.get("/{table_name}/fields", response_model=list[FieldSpecResponse])
def get_fields(
    table_name: str,
    key: str | None = None,
    svc: CrudService = Depends(get_crud_service),
) -> list[FieldSpecResponse]:
    """Form fields for adding a row, or for editing the row identified by ``key``."""
    try:
        existing_row = None
        if key is not None:
            existing_row = svc.find_row(table_name, key)
            if existing_row is None:
                raise HTTPException(status_code=404, detail=f"No row with key {key}")
        fields = svc.get_editable_fields(table_name, existing_row)
    except CrudError as e:
        raise http_error(e) from e
    return [FieldSpecResponse.from_spec(spec) for spec in fields]


@router.post("/{table_name}/records", response_model=OperationResponse, status_code=201)
def create_record(
    table_name: str,
    request: RecordRequest,
    svc: CrudService = Depends(get_crud_service),
) -> OperationResponse:
    """Insert a new row."""
    try:
        fields = svc.fill_fields(table_name, request.values)
    except CrudError as e:
        raise http_error(e) from e
    result = svc.submit(table_name, fields, is_update=False)
    check_operation_result(result, f"create record in {table_name}")
    return OperationResponse.from_result(result)


@router.put("/{table_name}/records/{key}", response_model=OperationResponse)
def update_record(
    table_name: str,
    key: str,
    request: RecordRequest,
    svc: CrudService = Depends(get_crud_service),
) -> OperationResponse:
    """Update the submitted columns of the row identified by ``key``."""
    try:
        fields = svc.fill_fields(table_name, request.values, primary_key_value=key)
    except CrudError as e:
        raise http_error(e) from e
    result = svc.submit(table_name, fields, is_update=True)
    check_operation_result(result, f"update record {key} in {table_name}")
    return OperationResponse.from_result(result)


@router.delete("/{table_name}/records/{key}", response_model=OperationResponse)
def delete_record(
    table_name: str,
    key: str,
    svc: CrudService = Depends(get_crud_service),
) -> OperationResponse:
    """Delete the row identified by ``key``."""
    result = svc.remove(table_name, key)
    check_operation_result(result, f"delete record {key} from {table_name}")
    return OperationResponse.from_result(result)
