"""
TaxConfig: Настройки НДС

Поставляются системными настройками магазина (внешний сервис).
Ядро корзины их не хранит, а получает при каждом расчёте.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field


class TaxConfig(BaseModel):
    """
    Настройки НДС.

    НДС начисляется только если vat_enabled=True и vat_rate_percent > 0.
    """

    vat_enabled: bool = Field(default=False, description="Включён ли НДС")
    vat_rate_percent: float = Field(default=0.0, ge=0, description="Ставка НДС (%)")

    model_config = {"frozen": True}

    @property
    def is_vat_applicable(self) -> bool:
        """True если НДС фактически начисляется."""
        return self.vat_enabled and self.vat_rate_percent > 0

    @classmethod
    def from_system_settings(cls, settings: Mapping[str, Any] | None) -> "TaxConfig":
        """
        TaxConfig из payload системных настроек.

        Payload настроек магазина содержит поля showVat и vatAmount
        (ставка в процентах). Отсутствующие поля или None → значения
        по умолчанию (НДС выключен).

        Args:
            settings: Словарь системных настроек (может быть None)

        Returns:
            TaxConfig

        Raises:
            pydantic.ValidationError: Если vatAmount отрицательный или не число
        """
        settings = settings or {}
        show_vat = settings.get("showVat")
        vat_amount = settings.get("vatAmount")

        return cls(
            vat_enabled=bool(show_vat) if show_vat is not None else False,
            vat_rate_percent=vat_amount if vat_amount is not None else 0.0,
        )
