"""
Billing Endpoints.

Service packages, client service requests and Chapa payments. Chapa is only
reached from the initialize and verify endpoints.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Query, status

from legal_aid.core.models.domain.enums import PaymentStatus, ServiceRequestStatus
from legal_aid.core.models.io import ApiResponse, ok
from legal_aid.core.models.io.billing import (
    ChapaInitializeRequest,
    ChapaInitializeResponse,
    PackageCreate,
    PackageRead,
    PackageUpdate,
    PaymentRead,
    PaymentStatusUpdate,
    ServiceRequestCreate,
    ServiceRequestRead,
    ServiceRequestStatusUpdate,
)
from legal_aid.server.services.deps import AdminDep, BillingServiceDep, ClientDep, CurrentUserDep

router = APIRouter()


# ---------------------------------------------------------------------
# Packages
# ---------------------------------------------------------------------


@router.get("/packages", response_model=ApiResponse[List[PackageRead]], summary="List Service Packages")
async def list_packages(user: CurrentUserDep, billing: BillingServiceDep):
    return ok([PackageRead.model_validate(p) for p in await billing.list_packages()])


@router.post(
    "/packages",
    response_model=ApiResponse[PackageRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Service Package",
    responses={400: {"description": "Package name already exists"}},
)
async def create_package(payload: PackageCreate, admin: AdminDep, billing: BillingServiceDep):
    return ok(PackageRead.model_validate(await billing.create_package(payload)), "Package created successfully")


@router.put("/packages/{package_id}", response_model=ApiResponse[PackageRead], summary="Update Service Package")
async def update_package(package_id: int, payload: PackageUpdate, admin: AdminDep, billing: BillingServiceDep):
    package = await billing.update_package(package_id, payload)
    return ok(PackageRead.model_validate(package), "Package updated successfully")


# ---------------------------------------------------------------------
# Service requests
# ---------------------------------------------------------------------


@router.post(
    "/requests",
    response_model=ApiResponse[ServiceRequestRead],
    status_code=status.HTTP_201_CREATED,
    summary="Request A Service",
)
async def create_request(payload: ServiceRequestCreate, client: ClientDep, billing: BillingServiceDep):
    request = await billing.create_request(client, payload)
    return ok(ServiceRequestRead.model_validate(request), "Service request submitted")


@router.get("/requests/mine", response_model=ApiResponse[List[ServiceRequestRead]], summary="My Service Requests")
async def my_requests(client: ClientDep, billing: BillingServiceDep):
    return ok([ServiceRequestRead.model_validate(r) for r in await billing.list_requests(client_id=client.id)])


@router.get("/requests", response_model=ApiResponse[List[ServiceRequestRead]], summary="List Service Requests")
async def list_requests(
    admin: AdminDep,
    billing: BillingServiceDep,
    status_filter: Annotated[Optional[ServiceRequestStatus], Query(alias="status")] = None,
    payment_status: Optional[PaymentStatus] = None,
):
    items = await billing.list_requests(status=status_filter, payment_status=payment_status)
    return ok([ServiceRequestRead.model_validate(r) for r in items])


@router.patch(
    "/requests/{request_id}/status",
    response_model=ApiResponse[ServiceRequestRead],
    summary="Update Service Request Status",
)
async def update_request_status(
    request_id: int, payload: ServiceRequestStatusUpdate, admin: AdminDep, billing: BillingServiceDep
):
    request = await billing.update_request_status(admin, request_id, payload)
    return ok(ServiceRequestRead.model_validate(request), "Service request updated")


@router.patch(
    "/requests/{request_id}/payment-status",
    response_model=ApiResponse[ServiceRequestRead],
    summary="Update Payment Status",
    description="Manual payment status change. Notifies the client and the assigned lawyer after commit.",
    responses={400: {"description": "Invalid status transition"}},
)
async def update_payment_status(
    request_id: int, payload: PaymentStatusUpdate, admin: AdminDep, billing: BillingServiceDep
):
    request = await billing.update_payment_status(admin, request_id, payload)
    return ok(ServiceRequestRead.model_validate(request), "Payment status updated")


# ---------------------------------------------------------------------
# Chapa
# ---------------------------------------------------------------------


@router.post(
    "/payments/chapa/initialize",
    response_model=ApiResponse[ChapaInitializeResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Initialize Chapa Payment",
    responses={
        404: {"description": "Service request not found"},
        409: {"description": "Transaction reference already exists"},
        502: {"description": "Payment initialization failed"},
    },
)
async def initialize_payment(payload: ChapaInitializeRequest, client: ClientDep, billing: BillingServiceDep):
    """
    Start a Chapa checkout for one of your service requests.

    - **service_request_id**: The request being paid
    - **amount** / **currency**: Charged amount, ETB by default
    - **tx_ref**: Optional; generated when omitted

    Redirect the client to ``checkout_url``.
    """
    payment = await billing.initialize_chapa(client, payload)
    return ok(
        ChapaInitializeResponse(
            checkout_url=payment.checkout_url,
            tx_ref=payment.tx_ref,
            payment=PaymentRead.model_validate(payment),
        ),
        "Payment initialized",
    )


@router.get(
    "/payments/chapa/verify/{tx_ref}",
    response_model=ApiResponse[PaymentRead],
    summary="Verify Chapa Payment",
    responses={404: {"description": "Payment not found"}, 502: {"description": "Payment verification failed"}},
)
async def verify_payment(tx_ref: str, user: CurrentUserDep, billing: BillingServiceDep):
    return ok(PaymentRead.model_validate(await billing.verify_chapa(user, tx_ref)))
