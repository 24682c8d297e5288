# contactbook/api/v1/routers/customers.py
from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from typing import List
from uuid import UUID

from contactbook.api.v1.dependencies import get_customer_store
from contactbook.core.exceptions import CustomerNotFound
from contactbook.core.logging import get_logger
from contactbook.crud.customer_crud import CustomerStore
from contactbook.schemas.customer_schemas import CustomerRead, CustomerSubmission, ErrorRead, ValidationErrorRead
from contactbook.services import customer_service

logger = get_logger(__name__)

router = APIRouter()

NULL_CUSTOMER_MESSAGE = "Customer is null."


def _require_payload(payload: CustomerSubmission | None, method: str) -> CustomerSubmission:
    if payload is None:
        logger.warning(f"{method}: Received null customer.")
        raise HTTPException(status.HTTP_400_BAD_REQUEST, NULL_CUSTOMER_MESSAGE)
    return payload


@router.get("", response_model=List[CustomerRead], responses={500: {"model": ErrorRead}})
def get_all_customers(store: CustomerStore = Depends(get_customer_store)):
    """List every customer. An empty contact book is an empty list, not an error."""
    logger.info("GET: Fetching all customers.")
    customers = customer_service.list_customers(store)
    logger.info(f"GET: Successfully retrieved {len(customers)} customers.")
    return customers


@router.get("/{customer_id}", response_model=CustomerRead, responses={404: {"model": ErrorRead}})
def get_customer_details(customer_id: UUID, store: CustomerStore = Depends(get_customer_store)):
    """Get a single customer by their ID."""
    customer = customer_service.get_customer(store, customer_id)
    if customer is None:
        raise CustomerNotFound(customer_id)
    return customer


@router.post(
    "",
    response_model=CustomerRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationErrorRead}, 500: {"model": ErrorRead}},
)
def create_new_customer(
        request: Request,
        response: Response,
        payload: CustomerSubmission | None = Body(None),
        store: CustomerStore = Depends(get_customer_store)
):
    """Create a new customer. The Location header points at the new record."""
    payload = _require_payload(payload, "POST")

    logger.info("POST: Creating a new customer.")
    customer = customer_service.create_customer(store, payload)
    logger.info(f"POST: Successfully created customer with ID {customer.id}.")

    response.headers["Location"] = str(request.url_for("get_customer_details", customer_id=str(customer.id)))
    return customer


@router.put(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"model": ValidationErrorRead},
        404: {"model": ErrorRead},
        409: {"model": ErrorRead},
        500: {"model": ErrorRead},
    },
)
def update_existing_customer(
        customer_id: UUID,
        payload: CustomerSubmission | None = Body(None),
        store: CustomerStore = Depends(get_customer_store)
):
    """Replace every field of a customer. There is no partial update."""
    payload = _require_payload(payload, "PUT")

    logger.info(f"PUT: Updating customer with ID {customer_id}.")
    customer_service.update_customer(store, customer_id, payload)
    logger.info(f"PUT: Successfully updated customer with ID {customer_id}.")


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorRead}, 500: {"model": ErrorRead}},
)
def delete_existing_customer(customer_id: UUID, store: CustomerStore = Depends(get_customer_store)):
    """Delete a customer permanently."""
    logger.info(f"DELETE: Deleting customer with ID {customer_id}.")
    customer_service.delete_customer(store, customer_id)
    logger.info(f"DELETE: Successfully deleted customer with ID {customer_id}.")
