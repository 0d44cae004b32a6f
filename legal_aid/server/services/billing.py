"""
Billing service.

Covers service packages, client service requests, manual payment status
updates and online payments through the Chapa gateway.
"""

from __future__ import annotations

import secrets
import time
from typing import Any, Dict, List, Optional

import httpx

from legal_aid.core.database.base import utc_now
from legal_aid.core.database.entities.billing import Payment, ServicePackage, ServiceRequest
from legal_aid.core.database.entities.users import User
from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import Conflict, ExternalServiceError, NotFound, ValidationFailed
from legal_aid.core.logging_config import get_logger
from legal_aid.core.models.domain.enums import (
    NotificationType,
    PaymentMethod,
    PaymentStatus,
    ServiceRequestStatus,
    UserRole,
)
from legal_aid.core.models.domain.transitions import PAYMENT_TRANSITIONS, can_transition, ensure_transition
from legal_aid.core.models.io.billing import (
    ChapaInitializeRequest,
    PackageCreate,
    PackageUpdate,
    PaymentStatusUpdate,
    ServiceRequestCreate,
    ServiceRequestStatusUpdate,
)
from legal_aid.core.monitoring import log_payment_event
from legal_aid.server.core.config import ChapaConfig

from .notifications import NotificationService

logger = get_logger(__name__)

_OPEN_REQUEST_STATUSES = frozenset({ServiceRequestStatus.PENDING.value, ServiceRequestStatus.IN_PROGRESS.value})


def generate_tx_ref(now_ms: Optional[int] = None) -> str:
    """Transaction reference of the form ``TX-{epoch ms}-{random}``."""
    return f"TX-{now_ms if now_ms is not None else int(time.time() * 1000)}-{secrets.token_hex(4)}"


class ChapaClient:
    """Minimal async client for the Chapa payment API.

    - POST ``{api_url}/transaction/initialize`` to open a checkout.
    - GET ``{api_url}/transaction/verify/{tx_ref}`` to read the outcome.
    """

    def __init__(self, config: ChapaConfig, *, client: Optional[httpx.AsyncClient] = None) -> None:
        self.config = config
        self._owns_client = client is None
        self._http = client or httpx.AsyncClient(timeout=10.0, follow_redirects=True)

    def _headers(self) -> Dict[str, str]:
        if not self.config.secret_key:
            raise ExternalServiceError("Payment gateway is not configured")
        return {"Authorization": f"Bearer {self.config.secret_key}", "Content-Type": "application/json"}

    async def initialize(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Open a checkout session.

        Raises:
            httpx.HTTPStatusError: If Chapa answers with an error status.
            httpx.TransportError: For transport-level HTTP issues.
        """
        url = f"{self.config.api_url.rstrip('/')}/transaction/initialize"
        logger.debug(f"ChapaClient.initialize: POST {url} tx_ref={payload.get('tx_ref')}")
        r = await self._http.post(url, json=payload, headers=self._headers())
        r.raise_for_status()
        return r.json()

    async def verify(self, tx_ref: str) -> Dict[str, Any]:
        url = f"{self.config.api_url.rstrip('/')}/transaction/verify/{tx_ref}"
        logger.debug(f"ChapaClient.verify: GET {url}")
        r = await self._http.get(url, headers=self._headers())
        r.raise_for_status()
        return r.json()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()


class BillingService:
    def __init__(self, repos: RepoBundle, chapa: Optional[ChapaClient] = None) -> None:
        self.repos = repos
        self.chapa = chapa
        self.notifications = NotificationService(repos)

    # ------------------------------------------------------------------
    # Packages
    # ------------------------------------------------------------------

    async def list_packages(self, *, include_inactive: bool = False) -> List[ServicePackage]:
        if include_inactive:
            return await self.repos.packages.list()
        return await self.repos.packages.list_active()

    async def create_package(self, payload: PackageCreate) -> ServicePackage:
        if await self.repos.packages.get_by_name(payload.name) is not None:
            raise ValidationFailed("Package name already exists")
        return await self.repos.packages.create(ServicePackage(**payload.model_dump()))

    async def update_package(self, package_id: int, payload: PackageUpdate) -> ServicePackage:
        package = await self.repos.packages.get_by_id(package_id)
        if package is None:
            raise NotFound("Package not found")
        changes = payload.model_dump(exclude_unset=True)
        if "name" in changes and changes["name"] != package.name:
            existing = await self.repos.packages.get_by_name(changes["name"])
            if existing is not None and existing.id != package.id:
                raise ValidationFailed("Package name already exists")
        for key, value in changes.items():
            setattr(package, key, value)
        return await self.repos.packages.update(package)

    # ------------------------------------------------------------------
    # Service requests
    # ------------------------------------------------------------------

    async def create_request(self, client: User, payload: ServiceRequestCreate) -> ServiceRequest:
        quoted_price = None
        if payload.package_id is not None:
            package = await self.repos.packages.get_by_id(payload.package_id)
            if package is None or not package.is_active:
                raise NotFound("Package not found")
            quoted_price = package.price
        return await self.repos.service_requests.create(
            ServiceRequest(
                client_id=client.id,
                package_id=payload.package_id,
                title=payload.title,
                description=payload.description,
                quoted_price=quoted_price,
            )
        )

    async def list_requests(
        self,
        *,
        client_id: Optional[int] = None,
        status: Optional[ServiceRequestStatus] = None,
        payment_status: Optional[PaymentStatus] = None,
    ) -> List[ServiceRequest]:
        return await self.repos.service_requests.list(
            filters={"client_id": client_id, "status": status, "payment_status": payment_status}
        )

    async def _notify_parties(
        self, request: ServiceRequest, title: str, message: str, type: NotificationType
    ) -> None:
        """Notify the client and the assigned lawyer once ``request`` is committed."""
        delivered = await self.notifications.notify_after_commit(
            [request.client_id, request.assigned_lawyer_id], title, message, type=type
        )
        if not delivered:
            # A failed fan-out rolls the session back and expires ``request``.
            await self.repos.session.refresh(request)

    async def _request(self, request_id: int) -> ServiceRequest:
        request = await self.repos.service_requests.get_by_id(request_id)
        if request is None:
            raise NotFound("Service request not found")
        return request

    async def update_request_status(
        self, admin: User, request_id: int, payload: ServiceRequestStatusUpdate
    ) -> ServiceRequest:
        request = await self._request(request_id)
        if request.status not in _OPEN_REQUEST_STATUSES and payload.status.value != request.status:
            raise ValidationFailed(f"Cannot change a {request.status} service request")
        if payload.assigned_lawyer_id is not None:
            lawyer = await self.repos.users.get_by_id(payload.assigned_lawyer_id)
            if lawyer is None or lawyer.role != UserRole.LAWYER.value:
                raise NotFound("Lawyer not found")
            request.assigned_lawyer_id = lawyer.id
        request.status = payload.status.value
        request = await self.repos.service_requests.update(request)
        await self._notify_parties(
            request,
            "Service request updated",
            f"Service request '{request.title}' is now {request.status}.",
            NotificationType.CASE_UPDATE,
        )
        return request

    async def update_payment_status(self, admin: User, request_id: int, payload: PaymentStatusUpdate) -> ServiceRequest:
        """Manually move the payment status of a service request.

        The change and its audit entry commit together; notifying the client
        and the assigned lawyer happens afterwards and never fails the update.
        """
        request = await self._request(request_id)
        previous = PaymentStatus(request.payment_status)
        ensure_transition(PAYMENT_TRANSITIONS, previous, payload.payment_status)

        request.payment_status = payload.payment_status.value
        request.updated_at = utc_now()
        self.repos.session.add(request)
        await self.repos.activities.record(
            "UPDATE_PAYMENT_STATUS",
            admin.id,
            {
                "service_request_id": request.id,
                "from": previous.value,
                "to": payload.payment_status.value,
                "note": payload.note,
            },
        )
        await self.repos.commit()

        await self._notify_parties(
            request,
            "Payment status updated",
            f"Payment for '{request.title}' is now {request.payment_status}.",
            NotificationType.PAYMENT,
        )
        return request

    # ------------------------------------------------------------------
    # Chapa payments
    # ------------------------------------------------------------------

    def _gateway(self) -> ChapaClient:
        if self.chapa is None or not self.chapa.config.secret_key:
            raise ExternalServiceError("Payment gateway is not configured")
        return self.chapa

    async def initialize_chapa(self, client: User, payload: ChapaInitializeRequest) -> Payment:
        """Record a PENDING payment and open a Chapa checkout for it.

        Raises:
            NotFound: The service request is not the client's.
            Conflict: ``tx_ref`` is already used.
            ExternalServiceError: Chapa failed or returned no checkout URL; the
                payment is kept as FAILED.
        """
        gateway = self._gateway()
        request = await self._request(payload.service_request_id)
        if request.client_id != client.id:
            raise NotFound("Service request not found")
        if request.payment_status == PaymentStatus.COMPLETED.value:
            raise ValidationFailed("Service request is already paid")

        tx_ref = payload.tx_ref or generate_tx_ref()
        if await self.repos.payments.get_by_tx_ref(tx_ref) is not None:
            raise Conflict("Transaction reference already exists")

        payment = await self.repos.payments.create(
            Payment(
                service_request_id=request.id,
                client_id=client.id,
                amount=payload.amount,
                currency=payload.currency,
                method=PaymentMethod.CHAPA.value,
                status=PaymentStatus.PENDING.value,
                tx_ref=tx_ref,
            )
        )
        body = {
            "amount": f"{payload.amount:.2f}",
            "currency": payload.currency,
            "email": payload.email,
            "first_name": payload.first_name or client.full_name.split(" ")[0],
            "last_name": payload.last_name or " ".join(client.full_name.split(" ")[1:]),
            "phone_number": payload.phone_number or client.phone,
            "tx_ref": tx_ref,
            "callback_url": gateway.config.callback_url,
            "return_url": gateway.config.return_url,
        }
        try:
            response = await gateway.initialize({key: value for key, value in body.items() if value})
        except httpx.HTTPError as e:
            logger.error(f"Chapa initialize failed for {tx_ref}: {e}")
            await self._mark_failed(payment)
            raise ExternalServiceError("Payment initialization failed") from e

        checkout_url = (response.get("data") or {}).get("checkout_url")
        if not checkout_url:
            logger.error(f"Chapa initialize returned no checkout_url for {tx_ref}: {response.get('message')}")
            await self._mark_failed(payment)
            raise ExternalServiceError("Payment initialization failed")

        payment.checkout_url = checkout_url
        payment = await self.repos.payments.update(payment)
        log_payment_event(tx_ref, payment.status, payment.amount)
        return payment

    async def _mark_failed(self, payment: Payment) -> None:
        payment.status = PaymentStatus.FAILED.value
        await self.repos.payments.update(payment)
        log_payment_event(payment.tx_ref, payment.status, payment.amount)

    async def verify_chapa(self, user: User, tx_ref: str) -> Payment:
        """Ask Chapa for the outcome of ``tx_ref`` and sync the payment and its request."""
        payment = await self.repos.payments.get_by_tx_ref(tx_ref)
        is_admin = user.role in (UserRole.ADMIN.value, UserRole.SUPER_ADMIN.value)
        if payment is None or (payment.client_id != user.id and not is_admin):
            raise NotFound("Payment not found")
        if payment.status == PaymentStatus.COMPLETED.value:
            return payment

        try:
            response = await self._gateway().verify(tx_ref)
        except httpx.HTTPError as e:
            logger.error(f"Chapa verify failed for {tx_ref}: {e}")
            raise ExternalServiceError("Payment verification failed") from e

        data = response.get("data") or {}
        outcome = str(data.get("status") or "").lower()
        if outcome == "success":
            target = PaymentStatus.COMPLETED
        elif outcome in ("failed", "cancelled"):
            target = PaymentStatus.FAILED if outcome == "failed" else PaymentStatus.CANCELLED
        else:
            return payment

        current = PaymentStatus(payment.status)
        if current != target and can_transition(PAYMENT_TRANSITIONS, current, target):
            payment.status = target.value
            if target == PaymentStatus.COMPLETED:
                payment.paid_at = utc_now()
                payment.provider_reference = data.get("reference")
            payment.updated_at = utc_now()
            self.repos.session.add(payment)

            request = await self.repos.service_requests.get_by_id(payment.service_request_id)
            if request is not None and can_transition(
                PAYMENT_TRANSITIONS, PaymentStatus(request.payment_status), target
            ):
                request.payment_status = target.value
                request.updated_at = utc_now()
                self.repos.session.add(request)
            await self.repos.commit()
            log_payment_event(tx_ref, payment.status, payment.amount)
        return payment
