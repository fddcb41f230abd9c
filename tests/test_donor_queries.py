from givetrack.services.donation_service import (
    get_latest_donors,
    search_donors,
    update_donation,
)


def test_latest_donors_only_confirmed_newest_first(make_campaign, make_donation, clock):
    camp = make_campaign()
    first = make_donation(campaign_id=camp["id"], donor_name="first")
    make_donation(campaign_id=camp["id"], donor_name="never confirmed")
    failed = make_donation(campaign_id=camp["id"], donor_name="failed")
    second = make_donation(campaign_id=camp["id"], donor_name="second")

    update_donation(first["id"], payment_status="confirmed")
    update_donation(failed["id"], payment_status="failed")
    update_donation(second["id"], payment_status="confirmed")

    got = get_latest_donors(camp["id"])
    assert [d["donor_name"] for d in got] == ["second", "first"]
    assert all(d["payment_status"] == "confirmed" for d in got)
    assert all(d["confirmed_at"] is not None for d in got)


def test_latest_donors_respects_limit(make_campaign, make_donation, clock):
    camp = make_campaign()
    names = ["a", "b", "c", "d"]
    for n in names:
        d = make_donation(campaign_id=camp["id"], donor_name=n)
        update_donation(d["id"], payment_status="confirmed")

    got = get_latest_donors(camp["id"], limit=2)
    assert [d["donor_name"] for d in got] == ["d", "c"]


def test_latest_donors_orders_by_confirmation_not_creation(
    make_campaign, make_donation, clock
):
    camp = make_campaign()
    old = make_donation(campaign_id=camp["id"], donor_name="created first")
    new = make_donation(campaign_id=camp["id"], donor_name="created second")
    update_donation(new["id"], payment_status="confirmed")
    update_donation(old["id"], payment_status="confirmed")

    got = get_latest_donors(camp["id"])
    assert [d["donor_name"] for d in got] == ["created first", "created second"]


def test_latest_donors_default_limit_is_five(make_campaign, make_donation, clock):
    camp = make_campaign()
    for i in range(7):
        d = make_donation(campaign_id=camp["id"], donor_name=f"donor {i}")
        update_donation(d["id"], payment_status="confirmed")
    assert len(get_latest_donors(camp["id"])) == 5


def test_unconfirmed_donor_drops_out(make_campaign, make_donation, clock):
    camp = make_campaign()
    d = make_donation(campaign_id=camp["id"])
    update_donation(d["id"], payment_status="confirmed")
    update_donation(d["id"], payment_status="pending")
    assert get_latest_donors(camp["id"]) == []


def test_latest_donors_scoped_to_campaign(make_campaign, make_donation, clock):
    a, b = make_campaign(name="a"), make_campaign(name="b")
    for camp in (a, b):
        d = make_donation(campaign_id=camp["id"], donor_name=camp["name"])
        update_donation(d["id"], payment_status="confirmed")
    assert [d["donor_name"] for d in get_latest_donors(a["id"])] == ["a"]


def test_latest_donors_empty(make_campaign, make_donation):
    camp = make_campaign()
    make_donation(campaign_id=camp["id"])
    assert get_latest_donors(camp["id"]) == []


def _seed_donors(make_campaign, make_donation):
    a, b = make_campaign(name="a"), make_campaign(name="b")
    make_donation(campaign_id=a["id"], donor_name="John Smith")
    make_donation(campaign_id=a["id"], donor_name="Jane Doe")
    make_donation(campaign_id=b["id"], donor_name="Johnny Walker")
    make_donation(campaign_id=b["id"], donor_name="Bob Johnson")
    return a, b


def test_search_across_campaigns(make_campaign, make_donation):
    _seed_donors(make_campaign, make_donation)
    got = {d["donor_name"] for d in search_donors("john")}
    assert got == {"John Smith", "Johnny Walker", "Bob Johnson"}


def test_search_is_case_insensitive(make_campaign, make_donation):
    _seed_donors(make_campaign, make_donation)
    assert {d["donor_name"] for d in search_donors("JOHN")} == {
        "John Smith",
        "Johnny Walker",
        "Bob Johnson",
    }


def test_search_within_campaign(make_campaign, make_donation):
    a, b = _seed_donors(make_campaign, make_donation)
    assert [d["donor_name"] for d in search_donors("john", campaign_id=a["id"])] == [
        "John Smith"
    ]
    assert search_donors("jane", campaign_id=b["id"]) == []


def test_search_partial_and_no_match(make_campaign, make_donation):
    _seed_donors(make_campaign, make_donation)
    assert [d["donor_name"] for d in search_donors("oe")] == ["Jane Doe"]
    assert search_donors("nobody") == []


def test_search_includes_every_status(make_campaign, make_donation):
    camp = make_campaign()
    d = make_donation(campaign_id=camp["id"], donor_name="Failed Fred")
    update_donation(d["id"], payment_status="failed")
    assert [x["id"] for x in search_donors("fred")] == [d["id"]]


def test_search_treats_wildcards_literally(make_campaign, make_donation):
    camp = make_campaign()
    make_donation(campaign_id=camp["id"], donor_name="100% Club")
    make_donation(campaign_id=camp["id"], donor_name="Plain Name")
    make_donation(campaign_id=camp["id"], donor_name="snake_case")

    assert [d["donor_name"] for d in search_donors("%")] == ["100% Club"]
    assert [d["donor_name"] for d in search_donors("_")] == ["snake_case"]
