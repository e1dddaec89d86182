import pytest


@pytest.fixture
def create_project(client, admin_headers, project_payload):
    def _create(**overrides):
        response = client.post('/api/projects', headers=admin_headers, json=project_payload(**overrides))
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']
    return _create


def test_create_project_applies_defaults(create_project):
    project = create_project(startDate='2024-01-15', endDate='2024-03-01T00:00:00.000Z')

    assert project['status'] == 'completed'
    assert project['featured'] is False
    assert project['images'] == []
    assert project['technologies'] == ['React', 'Flask']
    assert project['startDate'] == '2024-01-15'
    assert project['endDate'] == '2024-03-01'


def test_create_project_requires_admin(client, user_headers, project_payload):
    assert client.post('/api/projects', headers=user_headers, json=project_payload()).status_code == 403


@pytest.mark.parametrize('overrides, message', [
    ({'category': 'games'}, 'games is not a valid category'),
    ({'status': 'abandoned'}, 'abandoned is not a valid status'),
    ({'technologies': []}, 'Please add at least one technology'),
    ({'shortDescription': 'x' * 151}, 'Short description cannot be more than 150 characters'),
    ({'startDate': 'last spring'}, 'Invalid value for startDate'),
])
def test_create_project_validation(client, admin_headers, project_payload, overrides, message):
    response = client.post('/api/projects', headers=admin_headers, json=project_payload(**overrides))
    assert response.status_code == 400
    assert message in response.get_json()['message']


def test_list_projects_filters(client, create_project):
    create_project()
    create_project(title='Mobile App', category='mobile', featured=True)
    create_project(title='Render Farm', category='3d', featured=True)

    data = client.get('/api/projects').get_json()['data']
    assert data['pagination']['totalProjects'] == 3
    assert data['categories'] == ['3d', 'mobile', 'web']

    mobile = client.get('/api/projects?category=mobile').get_json()['data']
    assert [project['title'] for project in mobile['projects']] == ['Mobile App']

    featured = client.get('/api/projects?featured=true').get_json()['data']
    assert sorted(project['title'] for project in featured['projects']) == ['Mobile App', 'Render Farm']


def test_get_project(client, create_project):
    project = create_project()
    response = client.get(f"/api/projects/{project['_id']}")
    assert response.status_code == 200
    assert response.get_json()['data']['title'] == 'Portfolio Site'


def test_get_unknown_project(client):
    response = client.get('/api/projects/does-not-exist')
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Project not found'


def test_update_project(client, admin_headers, create_project):
    project = create_project()

    response = client.put(f"/api/projects/{project['_id']}", headers=admin_headers,
                          json={'status': 'in-progress', 'featured': 'true'})

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['status'] == 'in-progress'
    assert data['featured'] is True
    assert data['title'] == 'Portfolio Site'


def test_update_project_rejects_invalid_category(client, admin_headers, create_project):
    project = create_project()
    response = client.put(f"/api/projects/{project['_id']}", headers=admin_headers, json={'category': 'games'})
    assert response.status_code == 400
    assert client.get(f"/api/projects/{project['_id']}").get_json()['data']['category'] == 'web'


def test_delete_project(client, admin_headers, create_project):
    project = create_project()
    assert client.delete(f"/api/projects/{project['_id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/projects/{project['_id']}").status_code == 404
