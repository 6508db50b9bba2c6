"""
Repository tests against a real SQLite schema.

Repositories only flush; ``session_scope`` commits, so rows written in one
scope are visible in the next.
"""

from datetime import date
from decimal import Decimal

import pytest

from portfolio.db.session import session_scope
from portfolio.domain.entities import Domain, DomainStatus, Evaluation, Sale, User
from portfolio.repositories import (
    DomainRepository,
    EvaluationRepository,
    SaleRepository,
    SettingsRepository,
    UserRepository,
)


def _domain(name="example.com", **overrides):
    values = dict(
        name=name,
        registrar="OVH",
        category="Tech",
        purchase_date=date(2024, 1, 1),
        expiration_date=date(2025, 1, 1),
        status=DomainStatus.ACTIVE,
        purchase_price=Decimal("10.00"),
    )
    values.update(overrides)
    return Domain(**values)


@pytest.mark.repositories
@pytest.mark.usefixtures("database")
class TestDomainRepository:
    def test_add_assigns_id_and_persists(self):
        with session_scope() as session:
            created = DomainRepository(session).add(_domain())

        with session_scope() as session:
            loaded = DomainRepository(session).get_by_id(created.id)

        assert loaded == created
        assert loaded.purchase_price == Decimal("10.00")

    def test_get_all_newest_first(self):
        with session_scope() as session:
            repo = DomainRepository(session)
            repo.add(_domain("one.com"))
            repo.add(_domain("two.com"))

        with session_scope() as session:
            names = [d.name for d in DomainRepository(session).get_all()]

        assert names == ["two.com", "one.com"]

    def test_update_unknown_returns_none(self):
        with session_scope() as session:
            assert DomainRepository(session).update(_domain(id=42)) is None

    def test_rollback_discards_flushed_rows(self):
        with pytest.raises(RuntimeError):
            with session_scope() as session:
                DomainRepository(session).add(_domain())
                raise RuntimeError("abort")

        with session_scope() as session:
            assert DomainRepository(session).get_all() == []


@pytest.mark.repositories
@pytest.mark.usefixtures("database")
class TestSaleAndEvaluationRepositories:
    def test_sales_are_joined_with_domain(self):
        with session_scope() as session:
            domain = DomainRepository(session).add(_domain(status=DomainStatus.SOLD))
            SaleRepository(session).add(
                Sale(
                    domain_id=domain.id,
                    sale_date=date(2024, 6, 1),
                    selling_price=Decimal("99.99"),
                    buyer="Bob",
                )
            )

        with session_scope() as session:
            (sale,) = SaleRepository(session).get_all_with_domains()

        assert sale.domain_name == "example.com"
        assert sale.registrar == "OVH"
        assert sale.selling_price == Decimal("99.99")

    def test_delete_for_domain_counts_rows(self):
        with session_scope() as session:
            domain = DomainRepository(session).add(_domain())
            evaluations = EvaluationRepository(session)
            for tool in ("Sedo", "Estibot"):
                evaluations.add(
                    Evaluation(
                        domain_id=domain.id,
                        tool=tool,
                        evaluation_date=date(2024, 2, 1),
                        estimated_value=Decimal("100"),
                    )
                )

        with session_scope() as session:
            assert EvaluationRepository(session).delete_for_domain(domain.id) == 2
            assert SaleRepository(session).delete_for_domain(domain.id) == 0


@pytest.mark.repositories
@pytest.mark.usefixtures("database")
class TestSettingsAndUserRepositories:
    def test_put_value_upserts(self):
        with session_scope() as session:
            SettingsRepository(session).put_value("customLists", "{}")
        with session_scope() as session:
            SettingsRepository(session).put_value("customLists", '{"registrars": []}')

        with session_scope() as session:
            repo = SettingsRepository(session)
            assert repo.get_value("customLists") == '{"registrars": []}'
            assert repo.get_value("missing") is None

    def test_credentials_by_username_or_email(self):
        with session_scope() as session:
            UserRepository(session).create(
                User(username="alice", email="alice@example.com"), "hashed"
            )

        with session_scope() as session:
            repo = UserRepository(session)
            by_name = repo.get_credentials("alice")
            by_email = repo.get_credentials("alice@example.com")
            missing = repo.get_credentials("bob")

        assert by_name == by_email
        assert by_name[1] == "hashed"
        assert missing is None
