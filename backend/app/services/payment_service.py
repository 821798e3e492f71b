"""
Payment Service - deposits through the RupantorPay hosted checkout.

The flow is: create a checkout session and send the player to its
payment_url; the gateway redirects back with the transaction id, which is
verified server-side before the wallet is credited. Checkout stages a
pending deposit for the player who opened it; only that player can have it
credited, and each gateway transaction id credits a wallet at most once.
"""

import logging
import secrets
import time
from typing import Any, Callable, Dict, Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.app.core import config
from backend.app.core.database import generate_id, utcnow
from backend.app.core.errors import GatewayError, NotFoundError, PermissionDeniedError, ServiceError
from backend.app.models.enums import TransactionType
from backend.app.models.user_model import PlayerProfile
from backend.app.models.wallet_model import Transaction
from backend.app.services.gateway_service import gateway_service

logger = logging.getLogger(__name__)

COMPLETED_STATES = {"completed", "success", "paid"}


class PaymentService:
    def __init__(self, client_factory: Optional[Callable[[], httpx.AsyncClient]] = None):
        # Tests swap this for a client over httpx.MockTransport
        self.client_factory = client_factory or (lambda: httpx.AsyncClient(timeout=15.0))

    async def _endpoints(self, db: AsyncSession) -> Dict[str, str]:
        """Admin-managed gateway settings win over the environment."""
        settings = await gateway_service.get_gateway_settings(db)
        access_token = settings.access_token or config.RUPANTORPAY_ACCESS_TOKEN
        if not access_token or access_token == "YOUR_SECRET_ACCESS_TOKEN":
            raise ServiceError("RupantorPay access token is not configured on the server.")
        api = config.RUPANTORPAY_API_URL.rstrip("/")
        return {
            "access_token": access_token,
            "checkout": settings.checkout_url or f"{api}/checkout",
            "verify": settings.verify_url or f"{api}/verify-payment",
        }

    async def _post(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            async with self.client_factory() as client:
                response = await client.post(url, json=payload)
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Payment gateway call to %s failed: %s", url, e)
            raise GatewayError("An unexpected error occurred while contacting the payment gateway.")

    async def create_payment_url(
        self,
        db: AsyncSession,
        user: PlayerProfile,
        amount: float,
        customer_name: str,
        customer_email: str,
        customer_phone: str,
    ) -> Dict[str, str]:
        """Opens a checkout session and stages a pending deposit owned by user."""
        endpoints = await self._endpoints(db)
        transaction_id = f"TRX-{int(time.time() * 1000)}{secrets.randbelow(1000):03d}"
        base_url = config.FRONTEND_BASE_URL.rstrip("/")

        result = await self._post(endpoints["checkout"], {
            "access_token": endpoints["access_token"],
            "transaction_id": transaction_id,
            "amount": amount,
            "success_url": f"{base_url}/payment/success?transaction_id={transaction_id}",
            "cancel_url": f"{base_url}/payment/cancel",
            "fail_url": f"{base_url}/payment/fail",
            "customer_name": customer_name,
            "customer_email": customer_email,
            "customer_phone": customer_phone,
        })

        payment_url = (result.get("data") or {}).get("payment_url") or result.get("payment_url")
        if result.get("status") != "success" or not payment_url:
            raise GatewayError(result.get("message") or "Failed to create payment link.")

        db.add(Transaction(
            id=generate_id("trx"),
            user_id=user.id,
            amount=amount,
            type=TransactionType.DEPOSIT,
            description=f"Deposit via RupantorPay ({transaction_id})",
            date=utcnow(),
            status="pending",
            reference=transaction_id,
        ))
        await db.commit()

        logger.info("Checkout %s created for %s", transaction_id, user.id)
        return {"payment_url": payment_url, "transaction_id": transaction_id}

    async def verify_payment(self, db: AsyncSession, transaction_id: str, user: PlayerProfile) -> Dict[str, Any]:
        """Verifies with the gateway and credits the pending deposit once, only to the user who opened it."""
        endpoints = await self._endpoints(db)

        staged = await db.execute(
            select(Transaction).where(Transaction.reference == transaction_id).with_for_update()
        )
        deposit = staged.scalar_one_or_none()
        if deposit is None or deposit.type != TransactionType.DEPOSIT:
            raise NotFoundError("Unknown payment transaction.")
        if deposit.user_id != user.id:
            logger.warning("User %s tried to verify deposit %s owned by %s", user.id, transaction_id, deposit.user_id)
            raise PermissionDeniedError("This payment belongs to another account.")
        if deposit.status == "completed":
            return {"credited": False, "message": "Payment already credited."}

        result = await self._post(endpoints["verify"], {
            "access_token": endpoints["access_token"],
            "transaction_id": transaction_id,
        })
        data = result.get("data") or {}
        if result.get("status") != "success" or str(data.get("status", "")).lower() not in COMPLETED_STATES:
            raise GatewayError(result.get("message") or "Payment has not been completed.")

        try:
            amount = float(data.get("amount"))
        except (TypeError, ValueError):
            raise GatewayError("Payment gateway returned no amount.")

        locked = await db.execute(select(PlayerProfile).where(PlayerProfile.id == user.id).with_for_update())
        profile = locked.scalar_one()
        profile.balance = (profile.balance or 0) + amount
        deposit.amount = amount
        deposit.status = "completed"
        deposit.date = utcnow()
        await db.commit()

        logger.info("Deposit %s credited %s to %s", transaction_id, amount, profile.id)
        return {"credited": True, "amount": amount, "balance": profile.balance}


payment_service = PaymentService()
