# huma

Small, dependency-free building blocks for writing HTTP APIs in Python.

## Modules

- `huma.casing` – `split` breaks identifiers into words (CamelCase,
  snake_case, kebab-case, spaces, numbers, symbols); `join`, `camel`,
  `lower_camel`, `snake` and `kebab` put them back together. Transforms such
  as `identity` and `initialism` can be passed to control each word, and
  `merge_numbers` joins numbers to neighbouring words (`h.264 stream` →
  `h264_stream`).
- `huma.chain` – `Middlewares`, a list of `middleware(ctx, next)` callables;
  `handler(endpoint)` composes them, in order, into one handler ending in
  `endpoint`.
- `huma.cookie` – `read_cookie(headers, name)` and `read_cookies(headers)`
  parse `Cookie` request headers (a mapping or a list of name/value pairs)
  into `Cookie` objects. A missing cookie raises `NoCookieError`.
- `huma.autoconfig` – the `AutoConfig` and `AutoConfigVar` dataclasses for CLI
  auto-configuration settings, each turned into a JSON-ready dict by
  `to_dict()`.
- `huma.flow` – `Mux`, a tiny router working on `Request` and `Response`
  objects. Patterns support named parameters (`/users/:id`), regular
  expression constraints (`/:age|^[0-9]+$`) and trailing wildcards
  (`/static/...`, read back with `param(request, "...")`). Registering `GET`
  also registers `HEAD`; a path that matches with another method gets
  `405 Method Not Allowed` (or `204` for `OPTIONS`) with an `Allow` header,
  and anything else gets `404`. `use` adds middleware (callables taking and
  returning a handler) and `group` gives a set of routes their own middleware.
  The `not_found`, `method_not_allowed` and `options` handlers can be
  replaced.
- `huma.conditional` – `Params` holds `If-Match`, `If-None-Match`,
  `If-Modified-Since` and `If-Unmodified-Since`. After `resolve(method)`,
  `check(etag, modified)` raises `StatusError` when a precondition fails:
  status 304 for reads, 412 with a list of `ErrorDetail` entries for writes.
- `huma.api` – `API`, built from a `Config`, holds content `Format`s
  (`json_format()` gives a JSON one), response transformers and an API-wide
  middleware stack. `unmarshal` and `marshal` pick the format by content
  type, including `+json` style suffixes, and raise `UnknownContentTypeError`
  for unknown types. `transform` runs the transformers in order;
  `use_middleware` and `middlewares()` manage the middleware.

## Installation

```
pip install .
```

## Examples

Casing:

```python
from huma import casing

casing.split("HTTPServer_2020")                  # ["HTTP", "Server", "2020"]
casing.snake("Stream1080P")                      # "stream_1080p"
casing.camel("platform-api", casing.initialism)  # "PlatformAPI"
```

Routing:

```python
from huma.flow import Mux, Request, param

mux = Mux()

def show(request, response):
    response.write("Hello, " + param(request, "name"))

mux.handle("/hello/:name", show, "GET")
response = mux.serve(Request("GET", "/hello/world"))
print(response.status, response.body)   # 200 b'Hello, world'
```

Middleware:

```python
from huma.chain import Middlewares

calls = []

def log(ctx, next_handler):
    calls.append("log")
    next_handler(ctx)

handler = Middlewares([log]).handler(lambda ctx: calls.append("endpoint"))
handler(None)
print(calls)   # ['log', 'endpoint']
```

Cookies:

```python
from huma.cookie import read_cookie

cookie = read_cookie({"Cookie": "session=token"}, "session")
print(cookie.value)   # token
```

Conditional requests:

```python
from huma.conditional import Params, StatusError

params = Params(if_match=['"abc123"'])
params.resolve("PUT")
try:
    params.check("other", None)
except StatusError as err:
    print(err.status)   # 412
```

Formats:

```python
from huma.api import API, Config, json_format

api = API(Config(formats={"application/json": json_format()}))
api.unmarshal("application/merge-patch+json", b'{"a": 1}')   # {'a': 1}
api.marshal("application/json", {"a": 1})                    # b'{"a": 1}'
```

## What it does not do

The package contains no HTTP server and no bindings to web frameworks:
`Mux.serve` takes a `Request` object and returns a `Response`, and `API` does
not register operations, generate OpenAPI documents, serve documentation
pages or negotiate content types from `Accept` headers. Wiring these pieces
into a running service is left to the caller.

## Running the tests

```
pip install .[test]
pytest
```