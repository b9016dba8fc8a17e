# Overview: Pytest coverage for health, index, snapshot and backup routes.

import json


class TestHealth:

    def test_health_reports_counts(self, client, vendor):
        response = client.get('/health')
        assert response.status_code == 200
        body = response.json
        assert body['status'] == 'healthy'
        assert body['timestamp'].endswith('Z')
        assert body['storage'] in ('memory', 'file', 'sql')
        assert body['database']['vendors'] == 1
        assert set(body['database']) == {'vendors', 'brands', 'issues', 'invoices', 'payments', 'creditNotes'}


class TestIndex:

    def test_root_lists_endpoints(self, client):
        response = client.get('/')
        assert response.status_code == 200
        assert response.json['endpoints']['invoicesComplete'] == '/api/invoices-complete'
        assert response.json == client.get('/api/info').json

    def test_unknown_route_is_json_404(self, client):
        response = client.get('/api/nothing-here')
        assert response.status_code == 404
        assert 'error' in response.json

    def test_wrong_method_is_json_405(self, client):
        response = client.get('/api/payments')
        assert response.status_code == 405
        assert 'error' in response.json


class TestSnapshot:

    def test_snapshot_shape(self, client, vendor, invoice):
        client.post('/api/brands', json={'vendorId': vendor['id'], 'name': 'Farm Fresh'})
        client.post('/api/issues', json={'vendorId': vendor['id'], 'productName': 'Milk', 'issueType': 'expired'})

        response = client.get('/api/data')
        assert response.status_code == 200
        data = response.json
        assert [v['name'] for v in data['vendors']] == ['Fresh Farms Co.']
        assert data['brands'][0]['vendorName'] == 'Fresh Farms Co.'
        assert data['issues'][0]['status'] == 'pending'
        assert data['invoices'][0]['invoiceNumber'] == 'INV-001'
        assert data['lastSaved'].endswith('Z')
        assert data['version'] == '3.0'

    def test_vendors_sorted_by_name(self, client):
        for name in ('Zeta Foods', 'alpha traders', 'Mango Co'):
            client.post('/api/vendors', json={'name': name})
        names = [v['name'] for v in client.get('/api/data').json['vendors']]
        assert names == ['alpha traders', 'Mango Co', 'Zeta Foods']

    def test_pending_issues_first(self, client, vendor):
        first = client.post('/api/issues', json={
            'vendorId': vendor['id'], 'productName': 'A', 'issueType': 'damaged', 'dateFound': '2024-03-10',
        }).json['issue']
        client.post('/api/issues', json={
            'vendorId': vendor['id'], 'productName': 'B', 'issueType': 'damaged', 'dateFound': '2024-03-01',
        })
        client.put(f"/api/issues/{first['id']}", json={'status': 'resolved'})
        products = [i['productName'] for i in client.get('/api/data').json['issues']]
        assert products == ['B', 'A']


class TestBackup:

    def test_backup_is_a_download(self, client, vendor):
        response = client.get('/api/backup')
        assert response.status_code == 200
        assert response.mimetype == 'application/json'
        disposition = response.headers['Content-Disposition']
        assert disposition.startswith('attachment; filename="backup_')
        document = json.loads(response.data)
        assert document['vendors'][0]['name'] == 'Fresh Farms Co.'
        assert document['backupCreated'].endswith('Z')
