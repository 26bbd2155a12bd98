"""Unit tests for guest reconciliation."""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from src.db import Guest, ShowGuest, SocialLink, session_scope
from src.ingestion import guest_reconciler
from src.ingestion.errors import GuestReconcileError
from src.ingestion.frontmatter_parser import ParsedGuest, parse_show_notes
from src.ingestion.guest_reconciler import (
    link_show_guest,
    reconcile_guest,
    reconcile_guests,
    split_guest_attributes,
    upsert_guest,
    upsert_social_links,
)
from src.ingestion.show_reconciler import ShowRef, upsert_show
from tests.conftest import render_show


@pytest.fixture
def show(session_factory):
    return upsert_show(
        session_factory,
        parse_show_notes(render_show()),
        hash="h1",
        number=712,
        md_file="712 - css-nesting.md",
    )


def _count(session_factory, model) -> int:
    with session_scope(session_factory) as session:
        return session.query(model).count()


def test_split_guest_attributes() -> None:
    columns, extra = split_guest_attributes(
        {"twitter": "ada", "github": "ada", "of": "Analytical", "born": date(1815, 12, 10)}
    )
    assert columns == {"twitter": "ada", "github": "ada", "of": "Analytical"}
    assert extra == {"born": "1815-12-10"}


def test_upsert_guest_updates_only_present_attributes(session_factory) -> None:
    guest_id = upsert_guest(
        session_factory, "Ada Lovelace", "ada-lovelace", {"twitter": "ada", "github": "ada"}
    )
    same_id = upsert_guest(
        session_factory, "Ada Lovelace", "ada-lovelace", {"twitter": "countess"}
    )

    assert same_id == guest_id
    with session_scope(session_factory) as session:
        guest = session.get(Guest, guest_id)
        assert guest.twitter == "countess"
        assert guest.github == "ada"


def test_upsert_social_links_is_idempotent(session_factory) -> None:
    guest_id = upsert_guest(session_factory, "Ada", "ada", {})

    assert upsert_social_links(session_factory, guest_id, ["https://a.dev", "https://a.dev"]) == 1
    assert upsert_social_links(session_factory, guest_id, ["https://a.dev", "https://b.dev"]) == 2
    assert upsert_social_links(session_factory, guest_id, []) == 0
    assert _count(session_factory, SocialLink) == 2


class TestLinkShowGuest:
    def test_links_once(self, session_factory, show) -> None:
        guest_id = upsert_guest(session_factory, "Ada", "ada", {})

        assert link_show_guest(session_factory, show.id, guest_id) is True
        assert link_show_guest(session_factory, show.id, guest_id) is False
        assert _count(session_factory, ShowGuest) == 1

    def test_link_created_concurrently_is_not_an_error(
        self, session_factory, show, monkeypatch
    ) -> None:
        guest_id = upsert_guest(session_factory, "Ada", "ada", {})
        link_show_guest(session_factory, show.id, guest_id)
        real_exists = guest_reconciler._show_guest_exists
        calls = []

        def stale_then_real(session, show_id, guest_id):
            calls.append(show_id)
            # First check misses the row another writer just committed
            return False if len(calls) == 1 else real_exists(session, show_id, guest_id)

        monkeypatch.setattr(guest_reconciler, "_show_guest_exists", stale_then_real)

        assert link_show_guest(session_factory, show.id, guest_id) is False
        assert len(calls) == 2
        assert _count(session_factory, ShowGuest) == 1

    def test_unknown_show_raises(self, session_factory) -> None:
        guest_id = upsert_guest(session_factory, "Ada", "ada", {})

        with pytest.raises(IntegrityError):
            link_show_guest(session_factory, "no-such-show", guest_id)
        assert _count(session_factory, ShowGuest) == 0

    def test_unknown_show_fails_the_guest(self, session_factory) -> None:
        result = reconcile_guest(
            session_factory, ShowRef(id="no-such-show", number=999), ParsedGuest(name="Ada")
        )

        assert not result.ok
        assert result.linked is False
        assert isinstance(result.error.__cause__, IntegrityError)


class TestReconcileGuest:
    def test_creates_guest_link_and_social(self, session_factory, show) -> None:
        result = reconcile_guest(
            session_factory,
            show,
            ParsedGuest(
                name="Jane Doe",
                social=("https://github.com/janedoe",),
                attributes={"github": "janedoe", "url": "https://jane.dev"},
            ),
        )

        assert result.ok
        assert result.name_slug == "jane-doe"
        assert result.linked is True
        assert result.social_links == 1
        with session_scope(session_factory) as session:
            guest = session.query(Guest).one()
            assert guest.name == "Jane Doe"
            assert guest.github == "janedoe"
            assert guest.url == "https://jane.dev"
            assert [s.link for s in guest.social_links] == ["https://github.com/janedoe"]
            assert session.query(ShowGuest).filter_by(show_id=show.id).count() == 1

    def test_second_run_writes_no_duplicates(self, session_factory, show) -> None:
        guest = ParsedGuest(name="Jane Doe", social=("https://github.com/janedoe",))

        first = reconcile_guest(session_factory, show, guest)
        second = reconcile_guest(session_factory, show, guest)

        assert first.linked is True
        assert second.linked is False
        assert second.guest_id == first.guest_id
        assert _count(session_factory, Guest) == 1
        assert _count(session_factory, ShowGuest) == 1
        assert _count(session_factory, SocialLink) == 1

    def test_nameless_guest_fails_without_writes(self, session_factory, show) -> None:
        result = reconcile_guest(
            session_factory, show, ParsedGuest(name=None, attributes={"twitter": "x"})
        )

        assert not result.ok
        assert isinstance(result.error, GuestReconcileError)
        assert result.error.show_number == 712
        assert _count(session_factory, Guest) == 0

    def test_unsluggable_name_fails(self, session_factory, show) -> None:
        result = reconcile_guest(session_factory, show, ParsedGuest(name="!!!"))
        assert not result.ok
        assert isinstance(result.error.__cause__, ValueError)


class TestReconcileGuests:
    def test_results_in_input_order(self, session_factory, show) -> None:
        guests = [ParsedGuest(name=name) for name in ("Ada", "Grace", "Linus", "Margaret")]

        results = reconcile_guests(session_factory, show, guests, max_workers=4)

        assert [r.name_slug for r in results] == ["ada", "grace", "linus", "margaret"]
        assert all(r.ok for r in results)
        assert _count(session_factory, ShowGuest) == 4

    def test_one_failure_does_not_affect_siblings(
        self, session_factory, show, monkeypatch
    ) -> None:
        real_upsert = guest_reconciler.upsert_guest

        def flaky_upsert(session_factory, name, name_slug, attributes):
            if name_slug == "grace":
                raise IntegrityError("INSERT INTO guests", {}, Exception("boom"))
            return real_upsert(session_factory, name, name_slug, attributes)

        monkeypatch.setattr(guest_reconciler, "upsert_guest", flaky_upsert)
        guests = [ParsedGuest(name=name) for name in ("Ada", "Grace", "Linus")]

        results = reconcile_guests(session_factory, show, guests, max_workers=3)

        assert [r.ok for r in results] == [True, False, True]
        assert isinstance(results[1].error.__cause__, IntegrityError)
        with session_scope(session_factory) as session:
            slugs = {g.name_slug for g in session.query(Guest).all()}
        assert slugs == {"ada", "linus"}
        assert _count(session_factory, ShowGuest) == 2

    def test_colliding_names_merge_into_one_guest(self, session_factory, show) -> None:
        guests = [
            ParsedGuest(name="José Núñez", attributes={"twitter": "jose"}),
            ParsedGuest(name="Jose Nunez", attributes={"github": "jnunez"}),
        ]

        results = reconcile_guests(session_factory, show, guests, max_workers=2)

        assert all(r.ok for r in results)
        assert results[0].guest_id == results[1].guest_id
        with session_scope(session_factory) as session:
            guest = session.query(Guest).one()
            assert guest.name_slug == "jose-nunez"
            assert guest.twitter == "jose"
            assert guest.github == "jnunez"
        assert _count(session_factory, ShowGuest) == 1

    def test_no_guests(self, session_factory, show) -> None:
        assert reconcile_guests(session_factory, show, []) == []
