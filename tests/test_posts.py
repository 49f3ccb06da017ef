import pytest


async def test_create_post(client, create_user):
    user = await create_user()

    response = await client.post(
        "/posts",
        json={"title": "T", "description": "D", "userId": user["id"]},
    )

    assert response.status_code == 201
    body = response.json()
    assert isinstance(body["id"], int)
    assert body == {"id": body["id"], "title": "T", "description": "D", "userId": user["id"]}


@pytest.mark.parametrize(
    "payload",
    [
        {"description": "D", "userId": 1},
        {"title": "T", "userId": 1},
        {"title": "T", "description": "D"},
        {"title": "", "description": "D", "userId": 1},
        {"title": "T", "description": "D", "userId": 0},
    ],
)
async def test_create_post_requires_all_fields(client, create_user, payload):
    await create_user()

    response = await client.post("/posts", json=payload)

    assert response.status_code == 400
    assert response.json() == {"message": "Title, description, and userId are required"}
    assert (await client.get("/users/1/posts")).json() == []


async def test_create_post_for_unknown_user_is_404(client):
    response = await client.post(
        "/posts",
        json={"title": "T", "description": "D", "userId": 42},
    )

    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}
    assert (await client.get("/users/42/posts")).json() == []


async def test_list_posts_only_returns_owned(client, create_user, create_post):
    ada = await create_user(first_name="Ada")
    alan = await create_user(first_name="Alan")
    first = await create_post(ada["id"], title="first")
    await create_post(alan["id"], title="other")
    second = await create_post(ada["id"], title="second")

    response = await client.get(f"/users/{ada['id']}/posts")

    assert response.status_code == 200
    assert response.json() == [first, second]


async def test_list_posts_for_user_without_posts_is_empty(client, create_user):
    user = await create_user()

    response = await client.get(f"/users/{user['id']}/posts")

    assert response.status_code == 200
    assert response.json() == []


async def test_list_posts_for_unknown_user_is_empty_not_404(client):
    response = await client.get("/users/12345/posts")

    assert response.status_code == 200
    assert response.json() == []


async def test_update_post_partial(client, create_user, create_post):
    user = await create_user()
    post = await create_post(user["id"], title="old", description="body")

    response = await client.put(f"/posts/{post['id']}", json={"title": "new"})

    assert response.status_code == 200
    assert response.json() == {**post, "title": "new"}


async def test_update_post_ignores_empty_values_and_owner(client, create_user, create_post):
    owner = await create_user(first_name="Owner")
    other = await create_user(first_name="Other")
    post = await create_post(owner["id"], title="kept", description="body")

    response = await client.put(
        f"/posts/{post['id']}",
        json={"title": "", "description": "changed", "userId": other["id"]},
    )

    assert response.status_code == 200
    assert response.json() == {
        "id": post["id"],
        "title": "kept",
        "description": "changed",
        "userId": owner["id"],
    }


async def test_update_missing_post_is_404(client):
    response = await client.put("/posts/999", json={"title": "X"})

    assert response.status_code == 404
    assert response.json() == {"message": "Post not found"}


async def test_delete_post(client, create_user, create_post):
    user = await create_user()
    post = await create_post(user["id"])

    response = await client.delete(f"/posts/{post['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Post deleted successfully"}
    assert (await client.get(f"/users/{user['id']}/posts")).json() == []


async def test_delete_missing_post_is_404(client):
    response = await client.delete("/posts/999")

    assert response.status_code == 404
    assert response.json() == {"message": "Post not found"}


async def test_deleting_user_removes_their_posts(client, create_user, create_post):
    user = await create_user(first_name="A", last_name="B", email="a@b.com")
    post = await create_post(user["id"], title="T", description="D")
    assert post["userId"] == user["id"]

    response = await client.delete(f"/users/{user['id']}")
    assert response.status_code == 200

    posts = await client.get(f"/users/{user['id']}/posts")
    assert posts.status_code == 200
    assert posts.json() == []

    # The post is gone, not orphaned
    assert (await client.delete(f"/posts/{post['id']}")).status_code == 404


async def test_deleting_user_keeps_other_users_posts(client, create_user, create_post):
    doomed = await create_user(first_name="Doomed")
    survivor = await create_user(first_name="Survivor")
    await create_post(doomed["id"])
    kept = await create_post(survivor["id"])

    await client.delete(f"/users/{doomed['id']}")

    assert (await client.get(f"/users/{survivor['id']}/posts")).json() == [kept]


async def test_create_post_without_body_is_400(client, create_user):
    user = await create_user()

    response = await client.post("/posts")

    assert response.status_code == 400
    assert response.json() == {"message": "Title, description, and userId are required"}
    assert (await client.get(f"/users/{user['id']}/posts")).json() == []


async def test_create_post_with_wrong_field_type_is_400(client, create_user):
    user = await create_user()

    response = await client.post(
        "/posts",
        json={"title": 5, "description": "D", "userId": user["id"]},
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid value for body.title"}
    assert (await client.get(f"/users/{user['id']}/posts")).json() == []


async def test_update_post_without_body_leaves_record_unchanged(client, create_user, create_post):
    user = await create_user()
    post = await create_post(user["id"])

    response = await client.put(f"/posts/{post['id']}")

    assert response.status_code == 200
    assert response.json() == post
