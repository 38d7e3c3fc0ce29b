import pytest
from pydantic import ValidationError

from search_portal.schemas.admin import AdminUserCreate, BrandCreate, BrandUpdate
from search_portal.schemas.auth import PasswordChange, UserLogin
from search_portal.schemas.search import BucketCreate, SearchRequest


def test_bucket_create_strips_name_and_dedupes_ids():
    body = BucketCreate(bucket_name="  Crime ", string_ids=["s1", "s2", "s1"])
    assert body.bucket_name == "Crime"
    assert body.string_ids == ["s1", "s2"]


def test_bucket_create_requires_strings():
    with pytest.raises(ValidationError):
        BucketCreate(bucket_name="Crime", string_ids=[])


def test_search_request_defaults_to_auto_mode():
    body = SearchRequest()
    assert body.mode.value == "auto"
    assert body.names == []


def test_brand_keywords_accept_comma_text_or_list():
    assert BrandCreate(name="Acme", keywords="a, b,, c ").keywords == ["a", "b", "c"]
    assert BrandCreate(name="Acme", keywords=["a", " "]).keywords == ["a"]
    assert BrandUpdate(keywords=None).keywords is None


def test_brand_name_not_blank():
    with pytest.raises(ValidationError):
        BrandCreate(name="   ")
    with pytest.raises(ValidationError):
        BrandUpdate(name=" ")


def test_admin_user_create_role_and_email():
    body = AdminUserCreate(username=" jdoe ", password="pw", email="j@example.com", role="analyst")
    assert body.username == "jdoe"
    with pytest.raises(ValidationError):
        AdminUserCreate(username="jdoe", password="pw", role="owner")
    with pytest.raises(ValidationError):
        AdminUserCreate(username="jdoe", password="pw", email="not-an-email")


def test_password_change_rules():
    with pytest.raises(ValidationError):
        PasswordChange(current_password="x", new_password="short", confirm_new_password="short")
    with pytest.raises(ValidationError):
        PasswordChange(current_password="x", new_password="longenough", confirm_new_password="different")
    assert PasswordChange(current_password="x", new_password="longenough", confirm_new_password="longenough")


def test_user_login_strips_username():
    assert UserLogin(username=" jdoe ", password="x").username == "jdoe"
