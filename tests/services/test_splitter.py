from equal_split_bot.services.settlement import Transfer
from equal_split_bot.services.shares import Participant, Summary
from equal_split_bot.services.splitter import split


def test_scenario_a(scenario_a):
    res = split(scenario_a)

    assert res.summary == Summary(total_amount=120, per_person_share=40, transaction_count=2)
    assert res.transfers == [
        Transfer(from_name="C", to_name="A", amount=40),
        Transfer(from_name="B", to_name="A", amount=10),
    ]
    assert [p.balance for p in res.participants] == [50, -10, -40]
    assert not res.is_empty
    assert not res.is_even


def test_scenario_b_everyone_even():
    res = split([Participant("A", 50), Participant("B", 50), Participant("C", 50)])

    assert res.summary == Summary(total_amount=150, per_person_share=50, transaction_count=0)
    assert res.transfers == []
    assert res.is_even
    assert not res.is_empty


def test_scenario_c_nothing_paid():
    res = split([Participant("A"), Participant("B")])

    assert res.summary == Summary()
    assert res.transfers == []
    assert res.is_empty
    assert not res.is_even


def test_remainder_split():
    res = split([Participant("A", 10), Participant("B"), Participant("C")])

    assert res.summary == Summary(total_amount=10, per_person_share=4, transaction_count=2)
    assert res.extra_unit_count == 1
    assert res.transfers == [
        Transfer(from_name="B", to_name="A", amount=3),
        Transfer(from_name="C", to_name="A", amount=3),
    ]


def test_explicit_count_overrides_list_length():
    res = split([Participant("A", 90), Participant("B", 30)], count=0)

    assert res.summary == Summary()
    assert res.transfers == []
