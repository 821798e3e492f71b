from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified

from backend.app.models.setting_model import Setting
from backend.app.schemas.wallet_schema import GatewaySettings

GATEWAY_KEY = "paymentGateway"


class GatewayService:
    async def get_gateway_settings(self, db: AsyncSession) -> GatewaySettings:
        setting = await db.get(Setting, GATEWAY_KEY)
        return GatewaySettings(**(setting.value if setting else {}))

    async def update_gateway_settings(self, db: AsyncSession, data: Dict[str, Any]) -> GatewaySettings:
        """Merges data into the stored settings; keys not sent are kept."""
        setting = await db.get(Setting, GATEWAY_KEY)
        if setting is None:
            setting = Setting(key=GATEWAY_KEY, value={})
            db.add(setting)
        setting.value = {**(setting.value or {}), **data}
        flag_modified(setting, "value")
        await db.commit()
        return GatewaySettings(**setting.value)


gateway_service = GatewayService()
