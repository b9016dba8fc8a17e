# Overview: Pytest coverage for app startup: store selection, demo seeding and fatal storage errors.

import pytest

from vendorhub import create_app
from vendorhub.stores import get_store


def _config(tmp_path, **overrides):
    config = {
        'TESTING': True,
        'STORE_BACKEND': 'memory',
        'DATA_FILE': str(tmp_path / 'vendorhub_data.json'),
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SEED_DEMO': False,
    }
    config.update(overrides)
    return config


class TestStartup:

    def test_file_store_creates_data_file(self, tmp_path):
        app = create_app(_config(tmp_path, STORE_BACKEND='file'))
        assert (tmp_path / 'vendorhub_data.json').exists()
        with app.app_context():
            assert get_store().name == 'file'

    def test_file_store_in_missing_directory(self, tmp_path):
        data_file = tmp_path / 'data' / 'nested' / 'vendorhub.json'
        app = create_app(_config(tmp_path, STORE_BACKEND='file', DATA_FILE=str(data_file)))
        assert data_file.exists()
        response = app.test_client().post('/api/vendors', json={'name': 'Nested'})
        assert response.status_code == 201

    def test_file_store_reopens_existing_data(self, tmp_path):
        first = create_app(_config(tmp_path, STORE_BACKEND='file'))
        first.test_client().post('/api/vendors', json={'name': 'Kept'})

        second = create_app(_config(tmp_path, STORE_BACKEND='file'))
        names = [v['name'] for v in second.test_client().get('/api/data').json['vendors']]
        assert names == ['Kept']

    def test_corrupt_data_file_is_fatal(self, tmp_path):
        (tmp_path / 'vendorhub_data.json').write_text('not json')
        with pytest.raises(SystemExit) as excinfo:
            create_app(_config(tmp_path, STORE_BACKEND='file'))
        assert excinfo.value.code == 1

    def test_unknown_backend_rejected(self, tmp_path):
        with pytest.raises(ValueError, match='STORE_BACKEND'):
            create_app(_config(tmp_path, STORE_BACKEND='redis'))

    def test_seed_demo_flag(self, tmp_path):
        app = create_app(_config(tmp_path, SEED_DEMO=True))
        data = app.test_client().get('/api/data').json
        assert [v['name'] for v in data['vendors']] == ['Dairy Delights', 'Fresh Farms Co.']
        assert len(data['brands']) == 2
        assert len(data['issues']) == 1

    def test_cors_header_for_allowed_origin(self, tmp_path):
        app = create_app(_config(tmp_path, CORS_ORIGINS=['http://localhost:5173']))
        response = app.test_client().get('/health', headers={'Origin': 'http://localhost:5173'})
        assert response.headers['Access-Control-Allow-Origin'] == 'http://localhost:5173'

        response = app.test_client().get('/health', headers={'Origin': 'http://evil.example'})
        assert 'Access-Control-Allow-Origin' not in response.headers
