from datetime import datetime, timedelta, timezone

import pytest

from chirpnet.timeline.service import (
    Followers,
    FollowingLookupError,
    Post,
    PostLookupError,
    TimelineError,
    TimelineService,
)

FIXED_TIME = datetime(2025, 8, 7, 10, 0, 0, tzinfo=timezone.utc)
USER_ID = "user-1"
FOLLOWING_IDS = ["user-2", "user-3"]
MOCK_POSTS = [
    Post(id="post-1", user_id="user-2", text="Post de user-2", created_at=FIXED_TIME),
    Post(id="post-2", user_id="user-3", text="Post de user-3",
         created_at=FIXED_TIME - timedelta(minutes=1)),
]


class FakeFollowClient:
    def __init__(self, followers=None, error=None):
        self.followers = followers
        self.error = error
        self.calls = []

    def get_following(self, user_id):
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        return self.followers


class FakePostClient:
    def __init__(self, posts=None, error=None):
        self.posts = posts
        self.error = error
        self.calls = []

    def get_posts_by_users(self, user_ids):
        self.calls.append(user_ids)
        if self.error is not None:
            raise self.error
        return self.posts


def test_timeline_with_posts():
    follow = FakeFollowClient(followers=Followers(followers=FOLLOWING_IDS))
    posts = FakePostClient(posts=MOCK_POSTS)
    result = TimelineService(follow, posts).get_user_timeline(USER_ID)
    assert result == MOCK_POSTS
    assert follow.calls == [USER_ID]
    assert posts.calls == [FOLLOWING_IDS]


def test_follow_client_fails():
    follow = FakeFollowClient(error=RuntimeError("follow client error"))
    posts = FakePostClient()
    with pytest.raises(FollowingLookupError):
        TimelineService(follow, posts).get_user_timeline(USER_ID)
    assert follow.calls == [USER_ID]
    assert posts.calls == []


def test_post_client_fails():
    follow = FakeFollowClient(followers=Followers(followers=FOLLOWING_IDS))
    posts = FakePostClient(error=RuntimeError("post client error"))
    with pytest.raises(PostLookupError):
        TimelineService(follow, posts).get_user_timeline(USER_ID)
    assert posts.calls == [FOLLOWING_IDS]


def test_user_follows_no_one():
    follow = FakeFollowClient(followers=Followers(followers=[]))
    posts = FakePostClient()
    assert TimelineService(follow, posts).get_user_timeline(USER_ID) == []
    assert posts.calls == []


def test_errors_share_base_and_messages():
    assert issubclass(FollowingLookupError, TimelineError)
    assert issubclass(PostLookupError, TimelineError)
    assert str(FollowingLookupError()) == "error getting following list for user"
    assert str(PostLookupError()) == "error getting post by user"