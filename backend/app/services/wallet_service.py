"""
Wallet Service - transaction history, withdraw methods and withdraw requests.

A withdraw request debits the balance when it is created, so an approved
request only records the withdrawal while a rejected one refunds it.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from backend.app.core.database import generate_id, utcnow
from backend.app.core.errors import ConflictError, NotFoundError, ServiceError
from backend.app.models.enums import MethodStatus, ReviewStatus, TransactionType
from backend.app.models.user_model import PlayerProfile
from backend.app.models.wallet_model import Transaction, WithdrawMethod, WithdrawRequest
from backend.app.services.notifications_service import notifications_service

logger = logging.getLogger(__name__)


class WalletService:
    async def list_transactions(self, db: AsyncSession, user_id: str) -> List[Transaction]:
        result = await db.execute(
            select(Transaction).where(Transaction.user_id == user_id).order_by(Transaction.date.desc())
        )
        return list(result.scalars().all())

    # --- Withdraw methods ---

    async def add_withdraw_method(self, db: AsyncSession, data: Dict[str, Any]) -> WithdrawMethod:
        method = WithdrawMethod(id=generate_id("wm"), **data)
        db.add(method)
        await db.commit()
        return method

    async def list_withdraw_methods(self, db: AsyncSession) -> List[WithdrawMethod]:
        result = await db.execute(select(WithdrawMethod).order_by(WithdrawMethod.name.asc()))
        return list(result.scalars().all())

    async def list_active_withdraw_methods(self, db: AsyncSession) -> List[WithdrawMethod]:
        result = await db.execute(
            select(WithdrawMethod)
            .where(WithdrawMethod.status == MethodStatus.ACTIVE)
            .order_by(WithdrawMethod.name.asc())
        )
        return list(result.scalars().all())

    async def get_withdraw_method(self, db: AsyncSession, method_id: str) -> WithdrawMethod:
        method = await db.get(WithdrawMethod, method_id)
        if not method:
            raise NotFoundError("Withdraw method not found.")
        return method

    async def update_withdraw_method(self, db: AsyncSession, method_id: str, data: Dict[str, Any]) -> WithdrawMethod:
        method = await self.get_withdraw_method(db, method_id)
        for field, value in data.items():
            setattr(method, field, value)
        if (method.max_amount or 0) < (method.min_amount or 0):
            raise ServiceError("Maximum amount must not be below the minimum amount.")
        await db.commit()
        return method

    async def delete_withdraw_method(self, db: AsyncSession, method_id: str):
        method = await self.get_withdraw_method(db, method_id)
        await db.delete(method)
        await db.commit()

    # --- Withdraw requests ---

    async def create_withdrawal_request(
        self, db: AsyncSession, user_id: str, amount: float, method_name: str, account_number: str
    ) -> WithdrawRequest:
        result = await db.execute(
            select(WithdrawMethod).where(
                WithdrawMethod.name == method_name, WithdrawMethod.status == MethodStatus.ACTIVE
            )
        )
        method = result.scalars().first()
        if not method:
            raise ServiceError(f'Withdraw method "{method_name}" is not available.')
        if amount < (method.min_amount or 0) or amount > (method.max_amount or 0):
            raise ServiceError(
                f"Amount must be between {method.min_amount:g} and {method.max_amount:g} for {method.name}."
            )

        result = await db.execute(select(PlayerProfile).where(PlayerProfile.id == user_id).with_for_update())
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found.")
        if (user.balance or 0) < amount:
            raise ServiceError("Insufficient balance.")

        user.balance = (user.balance or 0) - amount
        request = WithdrawRequest(
            id=generate_id("wr"),
            user_id=user.id,
            user_name=user.name,
            user_gamer_id=user.gamer_id,
            amount=amount,
            method=method.name,
            account_number=account_number,
            status=ReviewStatus.PENDING,
            requested_at=utcnow(),
        )
        db.add(request)
        await db.commit()
        logger.info("Withdraw request %s: %s from %s via %s", request.id, amount, user.id, method.name)
        return request

    async def list_pending_withdraw_requests(self, db: AsyncSession) -> List[WithdrawRequest]:
        result = await db.execute(
            select(WithdrawRequest)
            .where(WithdrawRequest.status == ReviewStatus.PENDING)
            .order_by(WithdrawRequest.requested_at.asc())
        )
        return list(result.scalars().all())

    async def list_user_withdraw_requests(self, db: AsyncSession, user_id: str) -> List[WithdrawRequest]:
        result = await db.execute(
            select(WithdrawRequest)
            .where(WithdrawRequest.user_id == user_id)
            .order_by(WithdrawRequest.requested_at.desc())
        )
        return list(result.scalars().all())

    async def process_withdraw_request(self, db: AsyncSession, request_id: str, status: str) -> WithdrawRequest:
        result = await db.execute(
            select(WithdrawRequest).where(WithdrawRequest.id == request_id).with_for_update()
        )
        request = result.scalar_one_or_none()
        if not request:
            raise NotFoundError("Withdraw request not found.")
        if request.status != ReviewStatus.PENDING:
            raise ConflictError(f"Request has already been {request.status}.")

        result = await db.execute(
            select(PlayerProfile).where(PlayerProfile.id == request.user_id).with_for_update()
        )
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found.")

        request.status = status
        if status == ReviewStatus.REJECTED:
            user.balance = (user.balance or 0) + request.amount
        else:
            db.add(Transaction(
                id=generate_id("trx"),
                user_id=user.id,
                amount=-request.amount,
                type=TransactionType.WITHDRAWAL,
                description=f"Withdrawal via {request.method}",
                date=utcnow(),
                status="completed",
            ))

        note = notifications_service.build(
            db,
            user.id,
            title=f"Withdrawal {status}",
            description=f"Your withdrawal request of {request.amount:g} TK has been {status}.",
            link="/wallet",
        )
        await db.commit()
        logger.info("Withdraw request %s %s", request.id, status)
        await notifications_service.announce([note])
        return request


wallet_service = WalletService()
