from types import SimpleNamespace

import pytest

import search_portal.scripts.create_admin as create_admin
import search_portal.scripts.ensure_tables as ensure_tables
import search_portal.scripts.open_search as open_search
from search_portal.schemas.search import Notice, SearchResultData
from search_portal.services.search_combinations import SearchLink
from search_portal.services.search_execution import SearchOutcome, SearchValidationError


class _DB:
    def close(self):
        return None


def test_ensure_tables_main(monkeypatch, capsys):
    monkeypatch.setattr(ensure_tables, "ensure_tables_exist", lambda: ["brands"])
    ensure_tables.main()
    assert "brands" in capsys.readouterr().out


def test_create_admin_requires_username(monkeypatch):
    monkeypatch.setattr(create_admin.sys, "argv", ["prog"])
    with pytest.raises(SystemExit):
        create_admin.main()


def test_create_admin_promotes_existing_user(monkeypatch):
    user = SimpleNamespace(id="u1")
    captured = {}
    monkeypatch.setattr(create_admin, "ensure_tables_exist", lambda: [])
    monkeypatch.setattr(create_admin, "SessionLocal", lambda: _DB())
    monkeypatch.setattr(create_admin, "get_by_username", lambda db, username: user)
    monkeypatch.setattr(create_admin, "update", lambda db, uid, **kwargs: captured.update(uid=uid, **kwargs) or user)
    monkeypatch.setattr(create_admin.sys, "argv", ["prog", "jdoe"])
    create_admin.main()
    assert captured == {"uid": "u1", "role": "admin", "is_active": True, "password_hash": None}


def test_create_admin_new_user_needs_password(monkeypatch):
    monkeypatch.setattr(create_admin, "ensure_tables_exist", lambda: [])
    monkeypatch.setattr(create_admin, "SessionLocal", lambda: _DB())
    monkeypatch.setattr(create_admin, "get_by_username", lambda db, username: None)
    monkeypatch.setattr(create_admin.sys, "argv", ["prog", "root", "short"])
    with pytest.raises(SystemExit):
        create_admin.main()


def test_create_admin_creates_user(monkeypatch):
    captured = {}
    monkeypatch.setattr(create_admin, "ensure_tables_exist", lambda: [])
    monkeypatch.setattr(create_admin, "SessionLocal", lambda: _DB())
    monkeypatch.setattr(create_admin, "get_by_username", lambda db, username: None)
    monkeypatch.setattr(
        create_admin,
        "create",
        lambda db, username, password, role="viewer": captured.update(username=username, role=role),
    )
    monkeypatch.setattr(create_admin.sys, "argv", ["prog", "root", "longenough1"])
    create_admin.main()
    assert captured == {"username": "root", "role": "admin"}


class _FakeEnvironment:
    def __init__(self):
        self.opened = []
        self.clipboard = None

    def open_url(self, url):
        self.opened.append(url)

    def write_clipboard(self, text):
        self.clipboard = text

    def sleep(self, seconds):
        return None


def _outcome():
    return SearchOutcome(
        result=SearchResultData(search_strings=["fraud"], search_names=["Acme"]),
        links=[SearchLink(label="fraud", query="fraud (Acme)", url="https://e/1")],
        notices=[Notice(title="Search prepared", description="ok")],
    )


def test_open_search_opens_every_link(monkeypatch, tmp_path):
    captured = {}
    bulk = tmp_path / "names.txt"
    bulk.write_text("Jane Doe\nBob", encoding="utf-8")

    def _perform(db, user_id, names, **kwargs):
        captured.update(user_id=user_id, names=names, **kwargs)
        return _outcome()

    monkeypatch.setattr(open_search, "perform_search", _perform)
    monkeypatch.setattr(open_search, "get_by_username", lambda db, username: SimpleNamespace(id="u1"))
    args = open_search.build_parser().parse_args(
        ["--names", "Acme", "--bulk", str(bulk), "--bucket", "b1", "--mode", "combined", "--user", "jdoe", "--stagger-ms", "0"]
    )
    env = _FakeEnvironment()
    assert open_search.run(args, db=_DB(), environment=env) == 0
    assert env.opened == ["https://e/1"]
    assert captured["user_id"] == "u1"
    assert captured["bulk_names"] == "Jane Doe\nBob"
    assert captured["selected_bucket_ids"] == ["b1"]
    assert captured["mode"] == "combined"


def test_open_search_copy_mode(monkeypatch):
    monkeypatch.setattr(open_search, "perform_search", lambda db, user_id, names, **kwargs: _outcome())
    args = open_search.build_parser().parse_args(["--names", "Acme", "--copy"])
    env = _FakeEnvironment()
    assert open_search.run(args, db=_DB(), environment=env) == 0
    assert env.clipboard == "https://e/1"
    assert env.opened == []


def test_open_search_validation_error(monkeypatch, capsys):
    def _perform(*args, **kwargs):
        raise SearchValidationError("Please add at least one search name, or ask admin to add search strings.")

    monkeypatch.setattr(open_search, "perform_search", _perform)
    args = open_search.build_parser().parse_args([])
    assert open_search.run(args, db=_DB(), environment=_FakeEnvironment()) == 1
    assert "at least one search name" in capsys.readouterr().out


def test_open_search_unknown_user(monkeypatch):
    monkeypatch.setattr(open_search, "get_by_username", lambda db, username: None)
    args = open_search.build_parser().parse_args(["--user", "ghost"])
    assert open_search.run(args, db=_DB(), environment=_FakeEnvironment()) == 1


def test_open_search_folds_bucket_flags(monkeypatch):
    captured = {}

    def _perform(db, user_id, names, **kwargs):
        captured.update(kwargs)
        return _outcome()

    monkeypatch.setattr(open_search, "perform_search", _perform)
    args = open_search.build_parser().parse_args(
        ["--names", "Acme", "--bucket", "b1", "--bucket", "b2", "--bucket", "b1", "--drop-bucket", "b2", "--stagger-ms", "0"]
    )
    assert open_search.run(args, db=_DB(), environment=_FakeEnvironment()) == 0
    assert captured["selected_bucket_ids"] == ["b1"]
