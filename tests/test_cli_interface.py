from decimal import Decimal

import pytest

from cli_interface import SplitCLI
from data_models import Bill, BillItem, Person
from main import main


@pytest.fixture
def answers(monkeypatch):
    """Feed scripted answers to input()."""
    def _answers(*values):
        replies = iter(values)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))
    return _answers


def test_show_split_results(dinner, answers, capsys):
    answers("7", "0")
    SplitCLI(bill=dinner).run()

    out = capsys.readouterr().out
    assert "SPLIT RESULTS" in out
    assert "$63.24" in out
    assert "$145.46" in out


def test_negative_tax_is_refused(dinner, answers, capsys):
    cli = SplitCLI(bill=dinner)
    answers("-5")
    cli.set_tax()

    assert "Invalid tax" in capsys.readouterr().out
    assert cli.bill.tax == Decimal("12.50")


def test_unparseable_tip_is_refused(dinner, answers, capsys):
    cli = SplitCLI(bill=dinner)
    answers("a lot")
    cli.set_tip()

    assert "Invalid amount" in capsys.readouterr().out
    assert cli.bill.tip == Decimal("18.00")


def test_set_tip_recomputes_totals(dinner, answers):
    cli = SplitCLI(bill=dinner)
    answers("0")
    cli.set_tip()

    assert cli.bill.tip == Decimal("0")
    assert abs(sum(p.total for p in cli.bill.people) - Decimal("127.46")) < Decimal("0.000001")


def test_build_a_bill_from_scratch(answers, capsys):
    cli = SplitCLI()
    answers("1", "Sam", "1", "Kim", "3")
    cli.manage_people()
    answers("Pizza", "24,00")
    cli.add_item()
    # everyone shares the pizza
    answers("1", "3")
    cli.assign_items()

    assert [p.name for p in cli.bill.people] == ["Sam", "Kim"]
    assert [p.total for p in cli.bill.people] == [Decimal("12"), Decimal("12")]


def test_toggle_a_person_off_an_item(dinner, answers):
    cli = SplitCLI(bill=dinner)
    # Grilled Salmon: toggle Alex off, then skip the remaining items
    answers("2", "1", "3", "3", "3", "3")
    cli.assign_items()

    assert cli.bill.item("1").assigned_to == frozenset()
    assert "Unassigned" in cli.splitter.summary()


def test_remove_person(dinner, answers):
    cli = SplitCLI(bill=dinner)
    answers("2", "3", "3")
    cli.manage_people()

    assert [p.name for p in cli.bill.people] == ["Alex", "Jordan"]


def test_bill_shows_unit_price_for_multiples(capsys):
    bill = Bill(
        items=[BillItem(id="i1", name="Burger", price=Decimal("20.00"), quantity=2, assigned_to={"p1"}),
               BillItem(id="i2", name="Fries", price=Decimal("4.50"), assigned_to={"p1"})],
        people=[Person(id="p1", name="Sam")],
    )
    SplitCLI(bill=bill).display_bill()

    out = capsys.readouterr().out
    assert "2 x $10.00" in out
    assert "1 x" not in out


def test_results_show_edited_total_beside_printed_one(dinner, answers, capsys):
    cli = SplitCLI(bill=dinner)
    answers("0")
    cli.set_tip()
    cli.display_results()
    cli.display_bill()

    out = capsys.readouterr().out
    assert out.count("$127.46 (printed total $145.46)") == 2


def test_new_bill(dinner, answers):
    cli = SplitCLI(bill=dinner)
    answers("9", "0")
    cli.run()
    assert cli.bill == Bill(currency=dinner.currency)


def test_quick_demo(capsys):
    assert main(["--demo", "--quick"]) == 0
    out = capsys.readouterr().out
    assert "Grilled Salmon" in out
    assert "Taylor" in out
    assert "$26.56" in out


def test_missing_image_fails(capsys, tmp_path):
    assert main([str(tmp_path / "nope.jpg"), "--quick"]) == 1
    assert "Invalid or unsupported image" in capsys.readouterr().out
