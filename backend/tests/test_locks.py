import pytest
from redis.exceptions import LockError

from checkin.errors import DocumentBusy
from checkin.locks import lock_name, user_document_lock


def test_lock_name_is_per_user():
    assert lock_name("T1", "U1") == "checkin:doc-lock:T1:U1"
    assert lock_name("T1", "U1") != lock_name("T1", "U2")


@pytest.mark.asyncio
async def test_lock_held_for_block_and_released(fake_redis):
    async with user_document_lock(fake_redis, "T1", "U1"):
        fake_redis.lock.return_value.release.assert_not_awaited()

    fake_redis.lock.assert_called_once_with("checkin:doc-lock:T1:U1", timeout=30, blocking_timeout=10)
    fake_redis.lock.return_value.release.assert_awaited_once()


@pytest.mark.asyncio
async def test_busy_lock_raises(fake_redis):
    fake_redis.lock.return_value.acquire.return_value = False
    with pytest.raises(DocumentBusy):
        async with user_document_lock(fake_redis, "T1", "U1"):
            pytest.fail("body must not run without the lock")


@pytest.mark.asyncio
async def test_expired_lock_on_release_is_tolerated(fake_redis):
    fake_redis.lock.return_value.release.side_effect = LockError("expired")
    async with user_document_lock(fake_redis, "T1", "U1"):
        pass


@pytest.mark.asyncio
async def test_released_when_body_fails(fake_redis):
    with pytest.raises(RuntimeError):
        async with user_document_lock(fake_redis, "T1", "U1"):
            raise RuntimeError("boom")
    fake_redis.lock.return_value.release.assert_awaited_once()
