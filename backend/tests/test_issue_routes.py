# Overview: Pytest coverage for issue API routes and the resolved-date rule.

from vendorhub.time_utils import today


def _create_issue(client, vendor_id, **extra):
    payload = {'vendorId': vendor_id, 'productName': 'Yoghurt 500g', 'issueType': 'expired'}
    payload.update(extra)
    response = client.post('/api/issues', json=payload)
    assert response.status_code == 201
    return response.json['issue']


class TestCreateIssue:

    def test_new_issue_is_pending(self, client, vendor):
        issue = _create_issue(client, vendor['id'], quantity=3, estimatedLoss=12.5)
        assert issue['status'] == 'pending'
        assert issue['resolvedDate'] is None
        assert issue['quantity'] == 3
        assert issue['estimatedLoss'] == 12.5
        assert issue['vendorName'] == 'Fresh Farms Co.'
        assert issue['vendorPhone'] == '+1-555-0123'

    def test_date_found_defaults_to_today(self, client, vendor):
        issue = _create_issue(client, vendor['id'])
        assert issue['dateFound'] == today().isoformat()

    def test_unknown_vendor(self, client):
        response = client.post('/api/issues', json={
            'vendorId': 9999, 'productName': 'Milk', 'issueType': 'expired',
        })
        assert response.status_code == 404

    def test_bad_issue_type(self, client, vendor):
        response = client.post('/api/issues', json={
            'vendorId': vendor['id'], 'productName': 'Milk', 'issueType': 'stolen',
        })
        assert response.status_code == 400


class TestUpdateIssue:

    def test_resolving_stamps_today(self, client, vendor):
        issue = _create_issue(client, vendor['id'])
        response = client.put(f"/api/issues/{issue['id']}", json={'status': 'resolved'})
        assert response.status_code == 200
        updated = response.json['issue']
        assert updated['status'] == 'resolved'
        assert updated['resolvedDate'] == today().isoformat()

    def test_reopening_clears_resolved_date(self, client, vendor):
        issue = _create_issue(client, vendor['id'])
        client.put(f"/api/issues/{issue['id']}", json={'status': 'resolved'})
        response = client.put(f"/api/issues/{issue['id']}", json={'status': 'pending'})
        updated = response.json['issue']
        assert updated['status'] == 'pending'
        assert updated['resolvedDate'] is None

    def test_update_without_status_keeps_resolution(self, client, vendor):
        issue = _create_issue(client, vendor['id'])
        client.put(f"/api/issues/{issue['id']}", json={'status': 'resolved'})
        response = client.put(f"/api/issues/{issue['id']}", json={'description': 'Refund agreed'})
        updated = response.json['issue']
        assert updated['status'] == 'resolved'
        assert updated['resolvedDate'] == today().isoformat()
        assert updated['description'] == 'Refund agreed'

    def test_update_missing_issue(self, client):
        response = client.put('/api/issues/9999', json={'status': 'resolved'})
        assert response.status_code == 404
        assert response.json['error'] == 'Issue not found'

    def test_update_rejects_unknown_field(self, client, vendor):
        issue = _create_issue(client, vendor['id'])
        response = client.put(f"/api/issues/{issue['id']}", json={'resolvedDate': '2020-01-01'})
        assert response.status_code == 400

    def test_blank_date_found_rejected(self, client, vendor):
        issue = _create_issue(client, vendor['id'], dateFound='2024-03-10')
        response = client.put(f"/api/issues/{issue['id']}", json={'dateFound': ''})
        assert response.status_code == 400
        assert 'dateFound' in response.json['error']

        data = client.get('/api/data').json
        assert data['issues'][0]['dateFound'] == '2024-03-10'

    def test_null_issue_type_rejected(self, client, vendor):
        issue = _create_issue(client, vendor['id'])
        response = client.put(f"/api/issues/{issue['id']}", json={'issueType': None})
        assert response.status_code == 400
        assert client.get('/api/data').json['issues'][0]['issueType'] == 'expired'
