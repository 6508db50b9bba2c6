from typing import List

from portfolio.db.base import Evaluation as DbEvaluation
from portfolio.domain.entities import Evaluation as DomainEvaluation
from portfolio.domain.interfaces import IEvaluationRepository


class EvaluationRepository(IEvaluationRepository):
    """Repository for Evaluation persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_all(self) -> List[DomainEvaluation]:
        db_evaluations = self.db.query(DbEvaluation).order_by(DbEvaluation.id).all()
        return [self._to_domain(e) for e in db_evaluations]

    def add(self, evaluation: DomainEvaluation) -> DomainEvaluation:
        db_evaluation = DbEvaluation(
            domain_id=evaluation.domain_id,
            tool=evaluation.tool,
            evaluation_date=evaluation.evaluation_date,
            estimated_value=evaluation.estimated_value,
        )
        self.db.add(db_evaluation)
        self.db.flush()
        return self._to_domain(db_evaluation)

    def delete(self, evaluation_id: int) -> bool:
        deleted = (
            self.db.query(DbEvaluation)
            .filter(DbEvaluation.id == evaluation_id)
            .delete(synchronize_session=False)
        )
        return deleted > 0

    def delete_for_domain(self, domain_id: int) -> int:
        return (
            self.db.query(DbEvaluation)
            .filter(DbEvaluation.domain_id == domain_id)
            .delete(synchronize_session=False)
        )

    @staticmethod
    def _to_domain(db_evaluation: DbEvaluation) -> DomainEvaluation:
        return DomainEvaluation(
            id=db_evaluation.id,
            domain_id=db_evaluation.domain_id,
            tool=db_evaluation.tool,
            evaluation_date=db_evaluation.evaluation_date,
            estimated_value=db_evaluation.estimated_value,
        )
