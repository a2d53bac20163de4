"""Template catalog and selected-template preference endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_preference_store
from api.models.responses import ErrorCodes, TemplateSelection
from models.templates import InvoiceTemplate
from services.catalog import AVAILABLE_TEMPLATES, get_template_by_id, get_templates_by_category
from services.settings import TemplatePreferenceStore

router = APIRouter(prefix="/v1", tags=["templates"])


def unknown_template(template_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error": f"Template not found: {template_id}",
            "code": ErrorCodes.NOT_FOUND,
            "details": [f"Available: {', '.join(t.id for t in AVAILABLE_TEMPLATES)}"],
        },
    )


@router.get("/templates", response_model=list[InvoiceTemplate])
def list_templates(category: str | None = None):
    if category:
        return get_templates_by_category(category)
    return list(AVAILABLE_TEMPLATES)


@router.get("/templates/{template_id}", response_model=InvoiceTemplate)
def get_template(template_id: str):
    template = get_template_by_id(template_id)
    if template is None:
        raise unknown_template(template_id)
    return template


@router.get("/settings/template", response_model=InvoiceTemplate)
def get_selected_template(store: TemplatePreferenceStore = Depends(get_preference_store)):
    return store.selected_template()


@router.put("/settings/template", response_model=InvoiceTemplate)
def select_template(
    selection: TemplateSelection,
    store: TemplatePreferenceStore = Depends(get_preference_store),
):
    try:
        return store.save(selection.template_id)
    except ValueError:
        raise unknown_template(selection.template_id)
