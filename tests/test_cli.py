from app import cli
from app.models.user import AdminUser
from app.core.security import verify_password


def test_create_admin(monkeypatch, db, session_factory, capsys):
    monkeypatch.setattr(cli, "SessionLocal", session_factory)

    assert cli.main(["create-admin", "founder", "--password", "a-long-password"]) == 0
    assert "Created admin 'founder'" in capsys.readouterr().out

    assert cli.main(["create-admin", "founder", "--password", "a-newer-password"]) == 0
    assert "Reset password for admin 'founder'" in capsys.readouterr().out

    user = db.query(AdminUser).one()
    assert verify_password("a-newer-password", user.hashed_password)


def test_create_admin_prompts_for_password(monkeypatch, db, session_factory):
    monkeypatch.setattr(cli, "SessionLocal", session_factory)
    answers = iter(["typed-password", "typed-password"])
    monkeypatch.setattr(cli.getpass, "getpass", lambda prompt: next(answers))

    assert cli.main(["create-admin", "founder"]) == 0
    assert db.query(AdminUser).count() == 1


def test_create_admin_rejects_short_password(monkeypatch, db, session_factory, capsys):
    monkeypatch.setattr(cli, "SessionLocal", session_factory)
    assert cli.main(["create-admin", "founder", "--password", "short"]) == 1
    assert "at least 8 characters" in capsys.readouterr().err
    assert db.query(AdminUser).count() == 0
