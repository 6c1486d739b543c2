import pytest

from taskboard.errors import ConflictError, NotFoundError, ValidationError
from taskboard.schemas import ColumnCreate

from tests.conftest import make_column, make_task


def test_seed_defaults_only_on_empty_board(services):
    created = services.columns.seed_defaults(["To Do", "In Progress", "Done"])

    assert [(c.name, c.sort_order) for c in created] == [("To Do", 1), ("In Progress", 2), ("Done", 3)]
    assert services.columns.seed_defaults(["Again"]) == []


def test_create_appends_to_board(services, columns):
    column = make_column(services, "  Review ")

    assert column.name == "Review"
    assert column.sort_order == 4


def test_create_rejects_bad_names(services, test_settings):
    with pytest.raises(ValidationError):
        services.columns.create(ColumnCreate(name="  "))
    with pytest.raises(ValidationError):
        services.columns.create(ColumnCreate(name="c" * (test_settings.COLUMN_NAME_MAX_LENGTH + 1)))


def test_delete_empty_column(services, columns):
    _, _, done = columns

    services.columns.delete(done.id)

    with services.store.snapshot() as tx:
        assert tx.get_column(done.id) is None
        assert [c.name for c in tx.get_columns()] == ["To Do", "In Progress"]


def test_delete_column_with_tasks_is_refused(services, columns):
    todo, _, _ = columns
    make_task(services, todo.id, "blocker")

    with pytest.raises(ConflictError, match="Cannot delete column with existing tasks"):
        services.columns.delete(todo.id)

    with services.store.snapshot() as tx:
        assert tx.get_column(todo.id) is not None
        assert [t.name for t in tx.get_tasks(todo.id)] == ["blocker"]


def test_delete_after_tasks_moved_out(services, columns):
    todo, doing, _ = columns
    task = make_task(services, todo.id, "leaving")
    services.placement.move(task.id, doing.id, 1)

    services.columns.delete(todo.id)

    with services.store.snapshot() as tx:
        assert tx.get_column(todo.id) is None


def test_delete_unknown_column(services, columns):
    with pytest.raises(NotFoundError):
        services.columns.delete(999)
