from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pydantic import ValidationError

from dashboard.invoicing.application.results import (
    INVOICES_PATH,
    InvoiceFormState,
    Navigate,
    Persisted,
)
from dashboard.invoicing.application.schemas.invoice_form import flatten_field_errors

DASHBOARD_PATH = "/dashboard"

router = APIRouter()


def require_session(request: Request) -> str:
    provider = request.app.state.credentials_provider
    token = request.cookies.get(provider.cookie_name)
    user_id = provider.verify_session(token) if token else None
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user_id


def _action_response(result: InvoiceFormState | Navigate | Persisted) -> Response:
    if isinstance(result, Navigate):
        return RedirectResponse(result.path, status_code=status.HTTP_303_SEE_OTHER)
    if isinstance(result, Persisted):
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return JSONResponse(asdict(result), status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)


@router.post("/login")
async def login(request: Request) -> Response:
    form_data = await request.form()
    response = RedirectResponse(DASHBOARD_PATH, status_code=status.HTTP_303_SEE_OTHER)
    message = await request.app.state.authenticate.execute(None, form_data, response)
    if message is None:
        return response
    return JSONResponse({"message": message}, status_code=status.HTTP_401_UNAUTHORIZED)


@router.get(INVOICES_PATH)
async def list_invoices(
    request: Request, _user_id: str = Depends(require_session)
) -> list[dict[str, Any]]:
    route_cache = request.app.state.route_cache
    page = route_cache.get(INVOICES_PATH)
    if page is None:
        invoices = await request.app.state.invoice_repository.fetch_invoices()
        page = [invoice.to_dict() for invoice in invoices]
        route_cache.set(INVOICES_PATH, page)
    return page


@router.post(INVOICES_PATH)
async def create_invoice(request: Request, _user_id: str = Depends(require_session)) -> Response:
    form_data = await request.form()
    result = await request.app.state.create_invoice.execute(None, form_data)
    return _action_response(result)


@router.post(INVOICES_PATH + "/{invoice_id}/edit")
async def update_invoice(
    invoice_id: str, request: Request, _user_id: str = Depends(require_session)
) -> Response:
    form_data = await request.form()
    try:
        result = await request.app.state.update_invoice.execute(invoice_id, form_data)
    except ValidationError as exc:
        return JSONResponse(
            {"errors": flatten_field_errors(exc)},
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )
    return _action_response(result)


@router.post(INVOICES_PATH + "/{invoice_id}/delete")
async def delete_invoice(
    invoice_id: str, request: Request, _user_id: str = Depends(require_session)
) -> Response:
    result = await request.app.state.delete_invoice.execute(invoice_id)
    return _action_response(result)
