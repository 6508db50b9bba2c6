"""Unit of work binding the repositories to one transactional session."""

from contextlib import contextmanager
from typing import Iterator

from portfolio.db.session import session_scope
from portfolio.repositories.domain_repo import DomainRepository
from portfolio.repositories.evaluation_repo import EvaluationRepository
from portfolio.repositories.sale_repo import SaleRepository
from portfolio.repositories.settings_repo import SettingsRepository
from portfolio.repositories.user_repo import UserRepository


class UnitOfWork:
    """Repositories sharing a single session.

    The session is committed or rolled back by ``unit_of_work`` when the
    ``with`` block exits; repositories only flush.
    """

    def __init__(self, session) -> None:
        self.session = session
        self.domains = DomainRepository(session)
        self.sales = SaleRepository(session)
        self.evaluations = EvaluationRepository(session)
        self.settings = SettingsRepository(session)
        self.users = UserRepository(session)


@contextmanager
def unit_of_work() -> Iterator[UnitOfWork]:
    with session_scope() as session:
        yield UnitOfWork(session)
