"""
Settings service for the custom lists document.

The document is stored as JSON under a single key. It is validated again
on every read so a hand-edited or truncated value never reaches clients;
anything unreadable is replaced by the default lists.
"""

import json
import logging
from typing import Callable, ContextManager

from portfolio.core.validation import CustomListsValidator
from portfolio.domain.entities import CustomLists
from portfolio.schemas.dtos import custom_lists_to_dict
from portfolio.services.unit_of_work import UnitOfWork, unit_of_work

logger = logging.getLogger(__name__)

CUSTOM_LISTS_KEY = "customLists"


class SettingsService:
    def __init__(
        self, uow_factory: Callable[[], ContextManager[UnitOfWork]] = unit_of_work
    ) -> None:
        self.uow_factory = uow_factory

    def get_custom_lists(self) -> CustomLists:
        with self.uow_factory() as uow:
            raw = uow.settings.get_value(CUSTOM_LISTS_KEY)

        if raw is None:
            return CustomLists()

        try:
            document = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(
                "Stored custom lists are not valid JSON, using defaults",
                extra={"context": {"key": CUSTOM_LISTS_KEY}},
            )
            return CustomLists()

        result = CustomListsValidator().validate(document)
        if not result.is_valid:
            logger.warning(
                "Stored custom lists are malformed, using defaults",
                extra={"context": {"key": CUSTOM_LISTS_KEY, "errors": result.errors}},
            )
            return CustomLists()
        return CustomLists(**result.cleaned_data)

    def update_custom_lists(self, custom_lists: CustomLists) -> CustomLists:
        """Replace the stored document and return what was stored."""
        value = json.dumps(custom_lists_to_dict(custom_lists))
        with self.uow_factory() as uow:
            uow.settings.put_value(CUSTOM_LISTS_KEY, value)

        logger.info(
            "Custom lists updated",
            extra={
                "context": {
                    "registrars": len(custom_lists.registrars),
                    "categories": len(custom_lists.categories),
                    "evaluation_tools": len(custom_lists.evaluation_tools),
                }
            },
        )
        return custom_lists

    def ensure_defaults(self) -> bool:
        """Store the default lists when no document exists yet."""
        with self.uow_factory() as uow:
            if uow.settings.get_value(CUSTOM_LISTS_KEY) is not None:
                return False
            uow.settings.put_value(
                CUSTOM_LISTS_KEY, json.dumps(custom_lists_to_dict(CustomLists()))
            )
        return True
