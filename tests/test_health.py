def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_unknown_user_id_format_is_validation_error(client, db_session):
    from tests.helpers import create_admin_in_db, user_header

    admin = create_admin_in_db(db_session)
    r = client.get("/admin/users/not-a-uuid", headers=user_header(admin))
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"
