"""Тесты адаптеров хранилища категорий и постов."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import DuplicateKey, StoreError, StoreUnavailable
from app.db.database import Database
from app.db.models import Post
from app.db.stores import CategoryStore, PostStore

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_post(category_id: str, email: str = "alice@x.com", offset: int = 0, **fields) -> Post:
    values = dict(
        title="Title",
        content="Body",
        category="Tech",
        category_id=category_id,
        slug="title",
        image_url="",
        author={"email": email},
        author_email=email,
        views=0,
        created_at=T0 + timedelta(minutes=offset),
        updated_at=T0 + timedelta(minutes=offset),
    )
    values.update(fields)
    return Post(**values)


class TestCategoryStore:
    def test_insert_assigns_id(self, category_store):
        category = category_store.insert("Tech", "tech", T0)

        assert category.id
        assert category_store.find_by_id(category.id).name == "Tech"

    def test_find_by_name_ignores_case(self, category_store):
        category = category_store.insert("Tech", "tech", T0)

        assert category_store.find_by_name_case_insensitive("tECH").id == category.id
        assert category_store.find_by_name_case_insensitive("Science") is None

    def test_unique_name_ignoring_case(self, category_store):
        category_store.insert("Tech", "tech", T0)

        with pytest.raises(DuplicateKey):
            category_store.insert("TECH", "tech", T0)

        # сессия остается рабочей после отката
        assert len(category_store.find_all()) == 1

    def test_delete(self, category_store):
        category_id = category_store.insert("Tech", "tech", T0).id

        assert category_store.delete_by_id(category_id) is True
        assert category_store.delete_by_id(category_id) is False
        assert category_store.find_by_id(category_id) is None

    def test_find_all_sorted_by_name(self, category_store):
        category_store.insert("Zoology", "zoology", T0)
        category_store.insert("Art", "art", T0)

        assert [c.name for c in category_store.find_all()] == ["Art", "Zoology"]


class TestPostStore:
    def test_insert_and_find(self, post_store):
        post = post_store.insert(make_post("c1"))

        found = post_store.find_by_id(post.id)
        assert found.title == "Title"
        assert found.author == {"email": "alice@x.com"}
        assert found.views == 0

    def test_find_missing(self, post_store):
        assert post_store.find_by_id("00000000-0000-0000-0000-000000000000") is None

    def test_find_many_newest_first_with_filters(self, post_store):
        old = post_store.insert(make_post("c1", offset=0))
        new = post_store.insert(make_post("c1", offset=5))
        other_cat = post_store.insert(make_post("c2", offset=3))
        bobs = post_store.insert(make_post("c1", email="bob@x.com", offset=1))

        assert [p.id for p in post_store.find_many()] == [new.id, other_cat.id, bobs.id, old.id]
        assert [p.id for p in post_store.find_many(category_id="c1")] == [new.id, bobs.id, old.id]
        assert [p.id for p in post_store.find_many(category_id="c1", author_email="bob@x.com")] == [bobs.id]
        assert [p.id for p in post_store.find_many(limit=2)] == [new.id, other_cat.id]
        assert len(post_store.find_many(limit=0)) == 4

    def test_update_by_id(self, post_store):
        post = post_store.insert(make_post("c1"))

        updated = post_store.update_by_id(post.id, {"title": "New"})

        assert updated.title == "New"
        assert post_store.update_by_id("missing", {"title": "x"}) is None

    def test_delete_and_count(self, post_store):
        first_id = post_store.insert(make_post("c1")).id
        post_store.insert(make_post("c1"))

        assert post_store.count_by_category_id("c1") == 2
        assert post_store.delete_by_id(first_id) is True
        assert post_store.delete_by_id(first_id) is False
        assert post_store.count_by_category_id("c1") == 1
        assert post_store.count_by_category_id("c2") == 0

    def test_increment_views(self, post_store):
        post = post_store.insert(make_post("c1"))

        assert post_store.increment_views(post.id).views == 1
        assert post_store.increment_views(post.id).views == 2
        assert post_store.increment_views("missing") is None

    def test_operational_error_is_store_unavailable(self, post_store, monkeypatch):
        def boom(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection timed out"))

        monkeypatch.setattr(post_store.db, "scalars", boom)

        with pytest.raises(StoreUnavailable) as exc_info:
            post_store.find_many()
        assert "connection timed out" in exc_info.value.diagnostic
        assert isinstance(exc_info.value, StoreError)


class TestDatabase:
    def test_session_before_connect(self):
        with pytest.raises(StoreUnavailable):
            Database("sqlite://").session()

    def test_lifecycle(self):
        database = Database("sqlite://")
        assert database.is_ready is False
        assert database.ping() is False

        database.connect(create_tables=True)
        assert database.is_ready is True
        assert database.ping() is True

        database.dispose()
        assert database.is_ready is False


def test_concurrent_increments_are_not_lost(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'views.db'}", connect_timeout=30)
    database.connect(create_tables=True)
    try:
        with database.session() as session:
            post_id = PostStore(session).insert(make_post("c1")).id

        def view(_):
            with database.session() as session:
                PostStore(session).increment_views(post_id)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(view, range(40)))

        with database.session() as session:
            assert PostStore(session).find_by_id(post_id).views == 40
    finally:
        database.dispose()
