import logging
from dataclasses import replace
from typing import Callable, ContextManager, List

from portfolio.core.exceptions import ValidationError
from portfolio.domain.entities import Evaluation
from portfolio.services.unit_of_work import UnitOfWork, unit_of_work

logger = logging.getLogger(__name__)


class EvaluationService:
    """Application service for domain value estimates."""

    def __init__(
        self, uow_factory: Callable[[], ContextManager[UnitOfWork]] = unit_of_work
    ) -> None:
        self.uow_factory = uow_factory

    def list_evaluations(self) -> List[Evaluation]:
        with self.uow_factory() as uow:
            return uow.evaluations.get_all()

    def create(self, evaluation: Evaluation) -> Evaluation:
        """Record an estimate; the domain must exist."""
        with self.uow_factory() as uow:
            if uow.domains.get_by_id(evaluation.domain_id) is None:
                raise ValidationError(
                    f"Domain {evaluation.domain_id} does not exist", field="domainId"
                )
            created = uow.evaluations.add(replace(evaluation, id=None))

        logger.info(
            "Evaluation created",
            extra={
                "context": {
                    "evaluation_id": created.id,
                    "domain_id": created.domain_id,
                    "tool": created.tool,
                }
            },
        )
        return created

    def delete(self, evaluation_id: int) -> bool:
        with self.uow_factory() as uow:
            deleted = uow.evaluations.delete(evaluation_id)
        if deleted:
            logger.info(
                "Evaluation deleted",
                extra={"context": {"evaluation_id": evaluation_id}},
            )
        return deleted
