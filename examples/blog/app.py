"""Blog — static post pages plus a small JSON API.

Demonstrates both halves of petrel:
- ``site`` renders ``/``, ``/blog/[slug]`` (one page per post in
  content/blog) and ``/tags/[tag]`` into ``dist/`` at build time
- ``api`` answers ``/api/posts`` and ``/api/posts/[id]`` per request

Build:
    petrel build examples.blog.app:site

Serve the API with any ASGI server:
    uvicorn examples.blog.app:app
"""

from collections import defaultdict
from pathlib import Path

from petrel import (
    CollectionSchema,
    CORSConfig,
    Dispatcher,
    RequestContext,
    Site,
    SiteConfig,
    json_response,
    sort_entries,
)
from petrel.content import date, required, string, string_list

HERE = Path(__file__).parent

config = SiteConfig(
    content_dir=HERE / "content",
    template_dir=HERE / "templates",
    static_dir=HERE / "public",
    output_dir=HERE / "dist",
)

# ---------------------------------------------------------------------------
# Site and content
# ---------------------------------------------------------------------------

site = Site(config, env={"PUBLIC_SITE_NAME": "Petrel Blog", "API_TOKEN": "secret"})

posts = site.collection(
    "blog",
    schema=CollectionSchema(
        {
            "title": [required, string],
            "date": [required, date],
            "tags": [string_list],
        }
    ),
)

# ---------------------------------------------------------------------------
# Static pages
# ---------------------------------------------------------------------------

site.page("/", "index.html", props=lambda: {"posts": sort_entries(posts.list_all())})
site.collection_page("/blog/[slug]", "post.html", posts)
site.not_found_page("404.html")


@site.static_paths("/tags/[tag]", "tag.html")
def tag_pages():
    by_tag = defaultdict(list)
    for entry in posts.list_all():
        for tag in entry.get("tags", []):
            by_tag[tag].append(entry)
    for tag, entries in sorted(by_tag.items()):
        yield {"tag": tag}, {"tag": tag, "posts": sort_entries(entries)}


# ---------------------------------------------------------------------------
# Request-time API
# ---------------------------------------------------------------------------

POSTS = {
    "1": {"id": 1, "slug": "first-post", "title": "First Post"},
    "2": {"id": 2, "slug": "second-post", "title": "Second Post"},
}

api = Dispatcher(config, env={"API_TOKEN": "secret"})
public_cors = CORSConfig(allow_origins=("*",), allow_headers=("Content-Type",))


@api.get("/api/posts", cors=public_cors)
def list_posts(request: RequestContext):
    return {"posts": [POSTS[key] for key in sorted(POSTS)]}


@api.get("/api/posts/[id]", cors=public_cors)
def show_post(request: RequestContext):
    post = POSTS.get(request.param("id"))
    if post is None:
        return json_response({"error": "Post not found"}, status=404)
    return json_response(post)


# Same-origin only
@api.post("/api/posts")
def create_post(request: RequestContext):
    if request.headers.get("authorization") != f"Bearer {request.env['API_TOKEN']}":
        return json_response({"error": "Unauthorized"}, status=401)
    data = request.json()
    if not isinstance(data, dict) or not data.get("title"):
        return json_response({"error": "title is required"}, status=400)
    new_id = str(len(POSTS) + 1)
    POSTS[new_id] = {"id": int(new_id), "slug": data.get("slug", ""), "title": data["title"]}
    return POSTS[new_id], 201


app = api.asgi()
