"""
Tests for API endpoints
"""
import io
import pytest


class TestHealthEndpoint:
    """Tests for health check endpoint"""

    def test_health_returns_healthy(self, client):
        from constants import BUILD_VERSION

        response = client.get('/api/system/health')
        data = response.get_json()["data"]

        assert response.status_code == 200
        assert data['status'] == 'healthy'
        assert data['database'] == 'ok'
        assert data['version'] == BUILD_VERSION
        assert data['storage'] == 'FakeStore'

    def test_metrics_endpoint(self, client):
        client.get('/api/system/health')
        response = client.get('/api/metrics')

        assert response.status_code == 200
        assert b'nexiplay_api_requests_total' in response.data


class TestAdminToken:
    """Tests for the admin bearer token"""

    @pytest.fixture
    def app_config(self):
        return {
            'TESTING': True,
            'SQLALCHEMY_DATABASE_URI': 'sqlite://',
            'RATELIMIT_ENABLED': False,
            'ADMIN_API_TOKEN': 's3cret-token',
        }

    def test_missing_token(self, client):
        response = client.get('/api/content')

        assert response.status_code == 401
        assert response.get_json()['code'] == 'AUTH_ERROR'

    def test_wrong_token(self, client):
        response = client.get('/api/content', headers={'Authorization': 'Bearer nope'})

        assert response.status_code == 401

    def test_valid_token(self, client):
        response = client.get('/api/content', headers={'Authorization': 'Bearer s3cret-token'})

        assert response.status_code == 200

    def test_health_is_public(self, client):
        assert client.get('/api/system/health').status_code == 200


class TestContentEndpoints:
    """Tests for content CRUD and the running tracker"""

    def test_create_get_update(self, client):
        response = client.post('/api/content', json={'title': 'Dune', 'type': 'movie', 'release_year': 2021})
        assert response.status_code == 201
        content = response.get_json()['data']
        assert content['slug'] == 'dune-2021'

        response = client.get(f"/api/content/{content['id']}")
        assert response.get_json()['data']['title'] == 'Dune'

        response = client.put(f"/api/content/{content['id']}", json={'title': 'Dune: Part One', 'type': 'movie'})
        assert response.status_code == 200
        assert response.get_json()['data']['title'] == 'Dune: Part One'

    def test_list_is_paginated(self, client, make_content):
        for i in range(3):
            make_content(title=f"Movie {i}")

        response = client.get('/api/content?page=2&per_page=2')
        data = response.get_json()

        assert data['pagination']['total'] == 3
        assert data['pagination']['page'] == 2
        assert len(data['data']) == 1

    @pytest.mark.parametrize('query,page,per_page', [
        ('page=0', 1, 50),
        ('page=-3&per_page=0', 1, 1),
        ('per_page=-5', 1, 1),
        ('per_page=5000', 1, 200),
    ])
    def test_list_clamps_paging(self, client, make_content, query, page, per_page):
        make_content(title='Only')

        response = client.get(f'/api/content?{query}')
        pagination = response.get_json()['pagination']

        assert response.status_code == 200
        assert (pagination['page'], pagination['per_page']) == (page, per_page)
        assert len(response.get_json()['data']) == 1

    def test_malformed_download_links(self, client):
        response = client.post('/api/content', json={'title': 'X', 'download_links': {'720p': 'oops'}})

        assert response.status_code == 400
        assert response.get_json()['code'] == 'VALIDATION_ERROR'
        assert '720p' in response.get_json()['message']
        assert client.get('/api/content').get_json()['pagination']['total'] == 0

    def test_validation_error(self, client):
        response = client.post('/api/content', json={'type': 'movie'})

        assert response.status_code == 400
        assert response.get_json()['code'] == 'VALIDATION_ERROR'

    def test_get_missing(self, client):
        assert client.get('/api/content/missing').status_code == 404

    def test_running_tracker(self, client, make_content):
        series = make_content(title='Airing', type='series', is_running=True, last_episode=1)
        series_id = series.id

        assert [c['id'] for c in client.get('/api/running').get_json()['data']] == [series_id]

        data = client.post(f'/api/running/{series_id}/episode-done').get_json()['data']
        assert (data['last_episode'], data['next_episode']) == (2, 3)

        assert client.post(f'/api/running/{series_id}/stop').status_code == 400
        assert client.post(f'/api/running/{series_id}/stop', json={'confirm': True}).status_code == 200
        assert client.get('/api/running').get_json()['data'] == []

    def test_categories(self, client):
        assert client.post('/api/categories', json={'name': 'Horror'}).status_code == 201
        assert [c['slug'] for c in client.get('/api/categories').get_json()['data']] == ['horror']


class TestUploadEndpoints:
    """Tests for image uploads"""

    def test_poster(self, client, store):
        response = client.post(
            '/api/uploads/poster',
            data={'file': (io.BytesIO(b'img'), 'poster.jpg')},
            content_type='multipart/form-data',
        )

        assert response.status_code == 201
        assert '/object/public/posters/' in response.get_json()['data']['url']

    def test_poster_without_file(self, client):
        response = client.post('/api/uploads/poster', data={}, content_type='multipart/form-data')

        assert response.status_code == 400

    def test_screenshots_drop_failures(self, client, store):
        store.fail_names = {'b.jpg'}
        response = client.post(
            '/api/uploads/screenshots',
            data={'files': [(io.BytesIO(b'1'), 'a.jpg'), (io.BytesIO(b'2'), 'b.jpg'), (io.BytesIO(b'3'), 'c.png')]},
            content_type='multipart/form-data',
        )

        assert response.status_code == 201
        assert len(response.get_json()['data']['urls']) == 2


class TestAdEndpoints:
    """Tests for /api/ads"""

    def test_image_ad_nulls_script(self, client):
        response = client.post('/api/ads', json={
            'title': 'Banner',
            'placement': 'home_top',
            'ad_type': 'image',
            'image_url': 'https://img/ad.png',
            'destination_url': 'https://shop',
            'script_code': '<script>x</script>',
        })
        ad = response.get_json()['data']

        assert response.status_code == 201
        assert ad['script_code'] is None

    def test_switch_to_script_nulls_image(self, client):
        ad = client.post('/api/ads', json={
            'title': 'Banner', 'placement': 'inline', 'ad_type': 'image',
            'image_url': 'https://img/ad.png', 'destination_url': 'https://shop',
        }).get_json()['data']

        response = client.put(f"/api/ads/{ad['id']}", json={
            'title': 'Banner', 'placement': 'inline', 'ad_type': 'script', 'script_code': '<script></script>',
        })
        updated = response.get_json()['data']

        assert (updated['image_url'], updated['destination_url']) == (None, None)
        assert client.get(f"/api/ads/{ad['id']}").get_json()['data']['ad_type'] == 'script'

    @pytest.mark.parametrize('payload', [
        {'title': 'x', 'placement': 'sidebar', 'ad_type': 'image', 'image_url': 'i', 'destination_url': 'd'},
        {'title': 'x', 'placement': 'inline', 'ad_type': 'video'},
        {'title': 'x', 'placement': 'inline', 'ad_type': 'image', 'image_url': 'i'},
        {'title': 'x', 'placement': 'inline', 'ad_type': 'script'},
    ])
    def test_invalid_ads(self, client, payload):
        assert client.post('/api/ads', json=payload).status_code == 400

    def test_delete(self, client):
        ad = client.post('/api/ads', json={
            'title': 'S', 'placement': 'popup_global', 'ad_type': 'script', 'script_code': 's',
        }).get_json()['data']

        assert client.delete(f"/api/ads/{ad['id']}").status_code == 400
        assert client.delete(f"/api/ads/{ad['id']}?confirm=true").status_code == 200
        assert client.get('/api/ads').get_json()['data'] == []


class TestNoticeEndpoints:
    """Tests for /api/notices"""

    def test_create_and_toggle(self, client):
        notice = client.post('/api/notices', json={'content': 'Maintenance tonight', 'type': 'popup'}).get_json()['data']

        assert notice['is_active'] is True
        assert notice['pages'] == 'all'

        toggled = client.post(f"/api/notices/{notice['id']}/toggle").get_json()['data']
        assert toggled['is_active'] is False

    def test_invalid_pages(self, client):
        response = client.post('/api/notices', json={'content': 'x', 'pages': 'search'})

        assert response.status_code == 400

    def test_toggle_missing(self, client):
        assert client.post('/api/notices/missing/toggle').status_code == 404


class TestChatbotEndpoints:
    """Tests for /api/chatbot"""

    def test_settings_singleton(self, client):
        data = client.get('/api/chatbot/settings').get_json()['data']
        assert data['id'] == 1

        data = client.put('/api/chatbot/settings', json={'bot_name': 'Nexi Bot', 'is_enabled': False}).get_json()['data']
        assert (data['bot_name'], data['is_enabled']) == ('Nexi Bot', False)

    def test_faq_fields_required(self, client):
        assert client.post('/api/chatbot/faqs', json={'question': 'q', 'answer': 'a'}).status_code == 400

        response = client.post('/api/chatbot/faqs', json={'question': 'q', 'answer': 'a', 'keywords': 'k'})
        assert response.status_code == 201
        assert len(client.get('/api/chatbot/faqs').get_json()['data']) == 1


class TestInboxEndpoints:
    """Tests for DMCA, requests, messages and comments"""

    def test_dmca_status(self, client, app):
        from db import db
        from models import DMCARequest

        item = DMCARequest(name='Studio', infringing_link='https://x')
        db.session.add(item)
        db.session.commit()
        item_id = item.id

        assert client.post(f'/api/dmca/{item_id}/status', json={'status': 'approved'}).status_code == 200
        assert client.post(f'/api/dmca/{item_id}/status', json={'status': 'added'}).status_code == 400
        assert client.get('/api/dmca').get_json()['data'][0]['status'] == 'approved'

    def test_request_status(self, client, app):
        from db import db
        from models import ContentRequest

        item = ContentRequest(content_name='Interstellar')
        db.session.add(item)
        db.session.commit()
        item_id = item.id

        assert client.post(f'/api/requests/{item_id}/status', json={'status': 'added'}).status_code == 200
        assert client.post(f'/api/requests/{item_id}/status', json={'status': 'approved'}).status_code == 400
        assert client.post('/api/requests/missing/status', json={'status': 'added'}).status_code == 404

    def test_comments_include_content(self, client, sample_content):
        data = client.get('/api/comments').get_json()['data']

        assert data[0]['movie'] == {'title': 'Sample Movie', 'slug': 'sample-movie-2024'}

        assert client.delete(f"/api/comments/{data[0]['id']}?confirm=true").status_code == 200
        assert client.get('/api/comments').get_json()['data'] == []

    def test_messages(self, client, app):
        from db import db
        from models import ContactMessage

        db.session.add(ContactMessage(name='Ana', message='Hello'))
        db.session.commit()

        messages = client.get('/api/messages').get_json()['data']
        assert messages[0]['message'] == 'Hello'
        assert client.delete(f"/api/messages/{messages[0]['id']}", json={'confirm': True}).status_code == 200


class TestPlatformSettingsEndpoints:
    """Tests for /api/platform-settings"""

    def test_defaults_created_on_first_read(self, client):
        data = client.get('/api/platform-settings').get_json()['data']

        assert data['app']['is_ads_enabled'] is False
        assert data['telegram']['telegram_type'] == 'channel'

    def test_update_both(self, client):
        response = client.put('/api/platform-settings', json={
            'app': {'is_ads_enabled': True, 'popunder_url': ''},
            'telegram': {'telegram_type': 'group', 'telegram_url': 'https://t.me/x', 'is_active': True},
        })
        data = response.get_json()['data']

        assert response.status_code == 200
        assert data['app']['is_ads_enabled'] is True
        assert data['app']['popunder_url'] is None
        assert data['telegram']['telegram_type'] == 'group'
        assert data['telegram']['updated_at'] is not None

    def test_invalid_telegram_type(self, client):
        response = client.put('/api/platform-settings', json={'telegram': {'telegram_type': 'bot'}})

        assert response.status_code == 400

    def test_settings_are_masked(self, client):
        data = client.get('/api/settings').get_json()['data']

        assert 'storage' in data
        assert data['storage']['service_key'] == '***'
