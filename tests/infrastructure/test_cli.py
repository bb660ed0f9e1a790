"""CLI tests through click's CliRunner, over in-memory fakes."""

from click.testing import CliRunner

from storefront.application.dto import CartLine, CustomerDetails
from storefront.infrastructure.cli.main import cli
from tests.fakes import ADMIN_EMAIL, make_container


def _with_order():
    container = make_container()
    placed = container.place_order().handle(
        [CartLine("half", 2)],
        "pickup",
        CustomerDetails(name="Sam", email="sam@example.com", phone="5551234567"),
    )
    return container, placed.order_id


def _run(container, *args):
    return CliRunner().invoke(cli, list(args), obj=container)


class TestOrderCommands:

    def test_show(self):
        container, order_id = _with_order()
        result = _run(container, "order", "show", "--id", order_id)
        assert result.exit_code == 0
        assert "Half tray" in result.output
        assert "$64.00" in result.output
        assert "Order created, awaiting Venmo payment" in result.output

    def test_show_unknown(self):
        result = _run(make_container(), "order", "show", "--id", "nope")
        assert result.exit_code != 0
        assert "Order not found" in result.output

    def test_status(self):
        container, order_id = _with_order()
        result = _run(
            container, "order", "status", "--id", order_id, "--to", "ready", "--admin", ADMIN_EMAIL
        )
        assert result.exit_code == 0
        assert "is now Ready" in result.output

    def test_status_requires_admin(self):
        container, order_id = _with_order()
        result = _run(
            container, "order", "status", "--id", order_id, "--to", "ready", "--admin", "x@y.z"
        )
        assert result.exit_code != 0
        assert "Unauthorized" in result.output

    def test_payment(self):
        container, order_id = _with_order()
        result = _run(
            container, "order", "payment", "--id", order_id, "--status", "paid", "--admin", ADMIN_EMAIL
        )
        assert result.exit_code == 0
        assert f"{order_id}  payment=paid" in result.output

    def test_mark_paid_twice(self):
        container, order_id = _with_order()
        assert "Order marked paid" in _run(container, "order", "mark-paid", "--id", order_id).output
        assert "already paid" in _run(container, "order", "mark-paid", "--id", order_id).output

    def test_remind(self):
        container, order_id = _with_order()
        result = _run(container, "order", "remind", "--id", order_id, "--admin", ADMIN_EMAIL)
        assert result.exit_code == 0
        assert "Reminder queued" in result.output


class TestSizeCommands:

    def test_list(self):
        result = _run(make_container(), "size", "list")
        assert result.exit_code == 0
        assert "Full tray" in result.output
        assert "$32.00" in result.output

    def test_update(self):
        container = make_container()
        result = _run(
            container,
            "size", "update", "--id", "half",
            "--set", "price_cents=3500",
            "--set", "is_active=false",
            "--admin", ADMIN_EMAIL,
        )
        assert result.exit_code == 0
        assert "price=$35.00" in result.output
        assert container.sizes.get_by_id("half").is_active is False

    def test_update_bad_assignment(self):
        result = _run(
            make_container(), "size", "update", "--id", "half", "--set", "price", "--admin", ADMIN_EMAIL
        )
        assert result.exit_code != 0
        assert "Expected 'field=value'" in result.output
