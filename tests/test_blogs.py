import pytest

from extensions import db
from models import Blog, User


@pytest.fixture
def create_blog(client, admin_headers, blog_payload):
    def _create(**overrides):
        response = client.post('/api/blogs', headers=admin_headers, json=blog_payload(**overrides))
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']
    return _create


def test_create_blog_derives_slug_and_author(client, admin_headers, blog_payload):
    response = client.post('/api/blogs', headers=admin_headers, json=blog_payload(title='Hello, World! 2024'))

    assert response.status_code == 201
    data = response.get_json()['data']
    assert data['slug'] == 'hello-world-2024'
    assert data['author']['name'] == 'Site Admin'
    assert data['views'] == 0
    assert data['readTime'] == 5
    assert data['categories'] == ['web', '3d']


def test_create_blog_uses_explicit_slug(create_blog):
    blog = create_blog(slug='My Custom Slug')
    assert blog['slug'] == 'my-custom-slug'


def test_create_blog_requires_admin(client, user_headers, blog_payload):
    response = client.post('/api/blogs', headers=user_headers, json=blog_payload())
    assert response.status_code == 403
    assert response.get_json()['message'] == 'Access denied. Admin privileges required.'


def test_create_blog_requires_token(client, blog_payload):
    assert client.post('/api/blogs', json=blog_payload()).status_code == 401


def test_create_blog_reports_missing_fields(client, admin_headers):
    response = client.post('/api/blogs', headers=admin_headers, json={'title': 'Only a title'})

    assert response.status_code == 400
    message = response.get_json()['message']
    assert message.startswith('Validation Error: ')
    assert 'Please add content' in message
    assert 'Please add an excerpt' in message


def test_create_blog_rejects_long_title(client, admin_headers, blog_payload):
    response = client.post('/api/blogs', headers=admin_headers, json=blog_payload(title='x' * 201))
    assert response.status_code == 400
    assert 'Title cannot be more than 200 characters' in response.get_json()['message']


def test_create_blog_rejects_title_without_slug_characters(client, admin_headers, blog_payload):
    response = client.post('/api/blogs', headers=admin_headers, json=blog_payload(title='!!!'))
    assert response.status_code == 400


def test_create_blog_rejects_duplicate_slug(client, admin_headers, blog_payload, create_blog):
    create_blog()
    response = client.post('/api/blogs', headers=admin_headers, json=blog_payload())
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Blog with this title/slug already exists'


def test_create_blog_rejects_bad_types(client, admin_headers, blog_payload):
    response = client.post('/api/blogs', headers=admin_headers, json=blog_payload(readTime='soon'))
    assert response.status_code == 400
    assert 'Invalid value for readTime' in response.get_json()['message']


def test_list_hides_drafts_from_public(client, create_blog):
    create_blog()
    create_blog(title='Secret Draft', isPublished=False)

    data = client.get('/api/blogs').get_json()['data']

    assert [blog['title'] for blog in data['blogs']] == ['Building a 3D Portfolio']
    assert data['pagination']['totalBlogs'] == 1


def test_admin_can_list_drafts(client, admin_headers, user_headers, create_blog):
    create_blog()
    create_blog(title='Secret Draft', isPublished=False)

    admin_view = client.get('/api/blogs?published=all', headers=admin_headers).get_json()['data']
    user_view = client.get('/api/blogs?published=all', headers=user_headers).get_json()['data']

    assert admin_view['pagination']['totalBlogs'] == 2
    assert user_view['pagination']['totalBlogs'] == 1


def test_list_filters_by_category(client, create_blog):
    create_blog()
    create_blog(title='Design Notes', categories=['design'])
    create_blog(title='Webgl Tricks', categories=['webgl'])

    data = client.get('/api/blogs?category=web').get_json()['data']

    assert [blog['title'] for blog in data['blogs']] == ['Building a 3D Portfolio']
    assert data['categories'] == ['3d', 'design', 'web', 'webgl']


def test_category_all_means_no_filter(client, create_blog):
    create_blog()
    create_blog(title='Design Notes', categories=['design'])
    data = client.get('/api/blogs?category=all').get_json()['data']
    assert data['pagination']['totalBlogs'] == 2


def test_list_search_is_case_insensitive(client, create_blog):
    create_blog()
    create_blog(title='Cooking', content='Pasta recipes', excerpt='Food')

    data = client.get('/api/blogs?search=THREE.JS').get_json()['data']
    assert [blog['title'] for blog in data['blogs']] == ['Building a 3D Portfolio']

    data = client.get('/api/blogs?search=100%25').get_json()['data']
    assert data['blogs'] == []


def test_list_pagination(client, create_blog):
    for number in range(5):
        create_blog(title=f'Post number {number}')

    data = client.get('/api/blogs?page=2&limit=2').get_json()['data']

    assert data['pagination'] == {'current': 2, 'total': 3, 'count': 2, 'totalBlogs': 5}


def test_list_ignores_invalid_pagination(client, create_blog):
    create_blog()
    data = client.get('/api/blogs?page=zero&limit=-4').get_json()['data']
    assert data['pagination']['current'] == 1
    assert data['pagination']['count'] == 1


def test_get_blog_by_slug_counts_views(client, create_blog):
    create_blog()

    client.get('/api/blogs/building-a-3d-portfolio')
    response = client.get('/api/blogs/building-a-3d-portfolio')

    assert response.status_code == 200
    assert response.get_json()['data']['views'] == 2


def test_get_unknown_blog(client):
    response = client.get('/api/blogs/nope')
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Blog not found'


def test_update_blog(client, admin_headers, create_blog):
    blog = create_blog()

    response = client.put(f"/api/blogs/{blog['_id']}", headers=admin_headers,
                          json={'title': 'Renamed Post', 'tags': 'a, b'})

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['title'] == 'Renamed Post'
    assert data['slug'] == 'building-a-3d-portfolio'
    assert data['tags'] == ['a', 'b']


def test_update_blog_regenerates_slug_when_cleared(client, admin_headers, create_blog):
    blog = create_blog()
    response = client.put(f"/api/blogs/{blog['_id']}", headers=admin_headers,
                          json={'title': 'Renamed Post', 'slug': ''})
    assert response.get_json()['data']['slug'] == 'renamed-post'


def test_update_blog_rejects_slug_clash(client, admin_headers, create_blog):
    create_blog()
    other = create_blog(title='Another Post')

    response = client.put(f"/api/blogs/{other['_id']}", headers=admin_headers,
                          json={'slug': 'building-a-3d-portfolio'})

    assert response.status_code == 400
    assert client.get('/api/blogs/another-post').status_code == 200


def test_update_unknown_blog(client, admin_headers):
    response = client.put('/api/blogs/missing-id', headers=admin_headers, json={'title': 'x'})
    assert response.status_code == 404


def test_delete_blog(client, admin_headers, create_blog):
    blog = create_blog()

    response = client.delete(f"/api/blogs/{blog['_id']}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get('/api/blogs/building-a-3d-portfolio').status_code == 404
    assert client.delete(f"/api/blogs/{blog['_id']}", headers=admin_headers).status_code == 404


def test_blog_author_relationship(app, client, create_blog):
    blog = create_blog()
    with app.app_context():
        stored = db.session.get(Blog, blog['_id'])
        assert isinstance(stored.author, User)


@pytest.mark.parametrize('categories', [['web', 5], ['web', ['nested']], ['web', {'name': '3d'}]])
def test_create_blog_rejects_non_text_categories(client, admin_headers, blog_payload, create_blog, categories):
    create_blog()
    response = client.post('/api/blogs', headers=admin_headers,
                           json=blog_payload(title='Mixed Types', categories=categories))

    assert response.status_code == 400
    assert 'Invalid value for categories: must be a list of text' in response.get_json()['message']
    assert client.get('/api/blogs').status_code == 200
