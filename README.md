# chirpnet

A small microblogging backend built from four independent HTTP services and
an API gateway in front of them. Every service is a plain WSGI application
served by Werkzeug and keeps its data in memory.

| Service  | Command             | Listens on | What it does                                  |
|----------|---------------------|------------|-----------------------------------------------|
| users    | `chirpnet-users`    | `:8080`    | creates users and looks them up by id         |
| follow   | `chirpnet-follow`   | `:8080`    | records who follows whom                      |
| post     | `chirpnet-post`     | `:8080`    | stores posts and lists them by author         |
| timeline | `chirpnet-timeline` | `:8080`    | builds a user's timeline from the other two   |
| gateway  | `chirpnet-gateway`  | `:8000`    | forwards incoming requests to the right service |

The commands take no options besides `--help` and run until interrupted.
All services use port 8080, so they are meant to run on separate hosts or
containers named `user-service`, `follow-service`, `post-service` and
`timeline-service`. The timeline service and the gateway reach the others
by those host names; the addresses are fixed in each service's
`load_config()` (and in `build_gateway()` for the gateway).

## Endpoints

A path that no route matches, or a known path with the wrong method, gets
`404` with the plain-text body `404 page not found`.

### users

- `GET /health` returns `{"status": "ok"}`.
- `POST /api/v1/users/` with `{"username": "ana", "email": "ana@example.com"}`
  gives the user a new UUID and the current UTC time as `created_at`, and
  answers `201` with `id`, `username`, `email` and `created_at`. A body that
  is not JSON gives `400` (`Invalid request body`); a missing username or
  email, or an address that does not look like an e-mail address, gives `400`
  with the reason; an address that is already registered gives `409`.
- `GET /api/v1/users/<userID>` returns the user, or `404` when there is none.

Error bodies look like `{"status": "Bad Request", "message": "..."}`. When a
lookup fails for any other reason the answer is `500` with the JSON string
`"Error al buscar el usuario"` as body.

### follow

- `POST /api/v1/users/<followerID>/follow` with `{"user_id_to_follow": "<id>"}`
  answers `202` with an empty body. Following yourself or someone you already
  follow gives `409`; a missing id to follow gives `400`, as does a body that
  is not a JSON object.
- `GET /api/v1/users/<userID>/following` returns `{"followers": [...]}`, the
  ids the user follows, in the order they were first followed.

Error bodies look like `{"status": 409, "message": "..."}`.

### post

- `POST /api/v1/posts/` with `{"user_id": "<id>", "text": "..."}` answers `202`
  with `{"status": "post accepted for processing"}`. A blank user id or text,
  or a text longer than 280 bytes in UTF-8, gives `400` with the reason. The
  request is handed to the post service in every case, so a rejected post is
  stored all the same. Posts are stored as sent: no id and no creation time are
  assigned (`id` stays empty and `created_at` is `0001-01-01T00:00:00Z`).
  Each stored post is announced as a `PostCreated` event, which is only
  written to the log.
- `GET /api/v1/posts/?user_ids=<id1>,<id2>` returns a JSON array of the posts
  of those users, newest `created_at` first and, among equal times, in the
  order they were stored. Without `user_ids` the answer is `400`.

Error bodies look like `{"message": "..."}`.

### timeline

- `GET /api/v1/users/<userID>/timeline` asks the follow service whom the user
  follows, fetches their posts from the post service and returns
  `{"status": "OK", "Post": [...]}`, each post carrying `user_id`, `text` and
  `created_at`. A user who follows nobody gets an empty list. If either
  service cannot be reached or answers with anything but `200`, the answer is
  `500`.

Error bodies look like `{"status": 500, "message": "..."}`.

### gateway

- `GET /health` returns `{"status": "ok"}`.
- Paths containing `/timeline` go to the timeline service, paths containing
  `/follow` to the follow service, paths starting with `/api/v1/posts` to the
  post service, and everything else to the user service. The method, query,
  body and headers are passed on (with `X-Forwarded-For` added) and the
  service's answer is relayed. If the service cannot be reached the gateway
  answers `502`.

Timestamps everywhere are RFC 3339 strings in UTC, such as
`2025-08-07T10:00:00Z`.

## Using the services from Python

Each service has a `Config` made by `load_config()` and a `Container` that
builds its parts once and hands out the same instances afterwards:

```python
from chirpnet.users.app import Container, load_config

container = Container(load_config())
app = container.server()   # a WSGI application
```

The object returned by `Container.server()` is a `chirpnet.web.Server`; call
its `start()` method to serve it, or mount it in any WSGI server. The gateway
is assembled with `chirpnet.gateway.build_gateway(client)`, which takes the
`httpx.Client` used to forward requests (a new one when left out).

The domain services can be used on their own as well:

- `chirpnet.follow.service.FollowService` over a
  `chirpnet.follow.repository.InMemoryFollowRepository` raises
  `CannotFollowSelfError`, `AlreadyFollowingError`, `FollowerIdRequiredError`
  or `FollowingIdRequiredError` where a rule is broken.
- `chirpnet.post.service.PostService` over a
  `chirpnet.post.repository.InMemoryPostRepository` and a
  `chirpnet.post.notifier.LoggingNotifier`.
- `chirpnet.users.service.UserService` over a
  `chirpnet.users.repository.InMemoryUserRepository` raises
  `MailAlreadyExistsError` and `UserNotFoundError`.
- `chirpnet.timeline.service.TimelineService` takes any objects with
  `get_following(user_id)` and `get_posts_by_users(user_ids)`; the HTTP ones
  are `HttpFollowClient` and `HttpPostClient` in `chirpnet.timeline.clients`.

Storage failures come out of every service as its own persistence error
(`FollowPersistenceError`, `PostPersistenceError`, `UserPersistenceError`).

## What the package does not do

- Nothing is kept between runs: all services store their data in memory.
- `chirpnet.users.repository.SqlUserRepository` stores users through a
  DB-API connection with `?` placeholders (such as `sqlite3`), but the user
  service does not use it, and it has no e-mail lookup, so it cannot back
  `UserService.create` on its own. `Config.sql_url` is not read by anything.
- New posts are not published to any message queue; the notifier only logs.
- There is no authentication or authorisation.

## Running the tests

The tests use pytest; install the package with its `test` extra first.