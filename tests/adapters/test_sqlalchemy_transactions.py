# tests/adapters/test_sqlalchemy_transactions.py
"""
Testes do adaptador de transações SQLAlchemy.

Os testes usam SQLite em memória com SAVEPOINT habilitado e asseguram que:
- `transaction()` faz commit ao final e executa os callbacks pendentes
- exceções revertem a escrita e descartam os callbacks
- um Command que falha reverte o que o corpo escreveu
- comandos aninhados usam SAVEPOINT: a falha interna não derruba a externa
- dentro de uma transação da aplicação, `on_success` aguarda o commit dela
"""

import pytest
from pydantic import BaseModel
from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine, event, select
from sqlalchemy.orm import Session

from atlas_operations.adapters.sqlalchemy import SQLAlchemyTransactions
from atlas_operations.core.contract import SchemaContract
from atlas_operations.core.engine import Command
from atlas_operations.core.pipeline import Failure, Success

metadata = MetaData()

posts = Table(
    "posts",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String(50), nullable=False),
)


class TitleParams(BaseModel):
    title: str


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")

    # pysqlite só emite SAVEPOINT corretamente com BEGIN explícito
    @event.listens_for(engine, "connect")
    def _connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def transactions(session):
    return SQLAlchemyTransactions(lambda: session)


def _titles(session):
    try:
        return list(session.scalars(select(posts.c.title).order_by(posts.c.id)))
    finally:
        session.rollback()


def _create_post(session):
    def create_post(params):
        session.execute(posts.insert().values(title=params["title"]))
        if params["title"] == "bad":
            return Failure({"text": "is not allowed", "path": "title"})
        return Success({"title": params["title"]})

    return create_post


@pytest.fixture
def seen():
    return []


@pytest.fixture
def command(session, transactions, seen):
    return Command(
        _create_post(session),
        contract=SchemaContract(TitleParams),
        policies=[],
        on_success=[lambda title: seen.append(title)],
        configuration=transactions.configuration(),
    )


# ---------------------------------------------------------------------------
# transaction / after_commit
# ---------------------------------------------------------------------------

def test_transaction_commits_and_runs_callbacks(session, transactions):
    done = []

    def block():
        session.execute(posts.insert().values(title="first"))
        transactions.after_commit(lambda: done.append("committed"))
        assert done == []
        return "ok"

    assert transactions.transaction(block) == "ok"
    assert done == ["committed"]
    assert _titles(session) == ["first"]


def test_exception_rolls_back_and_discards_callbacks(session, transactions):
    done = []

    def block():
        session.execute(posts.insert().values(title="first"))
        transactions.after_commit(lambda: done.append("committed"))
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        transactions.transaction(block)

    assert done == []
    assert _titles(session) == []


def test_after_commit_outside_transaction_runs_immediately(transactions):
    done = []

    transactions.after_commit(lambda: done.append("now"))

    assert done == ["now"]


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

def test_failed_command_rolls_back_its_writes(session, command, seen):
    failed = command.call({"title": "bad"})
    succeeded = command.call({"title": "good"})

    assert failed.failure
    assert failed.errors.to_dict() == {"title": ["is not allowed"]}
    assert succeeded.success
    assert seen == ["good"]
    assert _titles(session) == ["good"]


def test_nested_command_uses_savepoint(session, transactions, command, seen):
    def outer_body(params):
        session.execute(posts.insert().values(title="outer"))
        assert command.call({"title": "bad"}).failure
        assert command.call({"title": "inner"}).success
        assert seen == []
        return Success()

    outer = Command(
        outer_body,
        contract=SchemaContract(TitleParams),
        policies=[],
        configuration=transactions.configuration(),
    )

    assert outer.call({"title": "outer"}).success
    assert seen == ["inner"]
    assert _titles(session) == ["outer", "inner"]


def test_application_transaction_commit_runs_callbacks(session, command, seen):
    with session.begin():
        assert command.call({"title": "first"}).success
        assert command.call({"title": "bad"}).failure
        assert command.call({"title": "third"}).success
        assert seen == []

    assert seen == ["first", "third"]
    assert _titles(session) == ["first", "third"]


def test_application_transaction_rollback_discards_callbacks(session, command, seen):
    with pytest.raises(RuntimeError):
        with session.begin():
            assert command.call({"title": "first"}).success
            raise RuntimeError("abort")

    assert seen == []
    assert _titles(session) == []
