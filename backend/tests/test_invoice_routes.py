# Overview: Pytest coverage for invoice, payment and credit note routes and the reconciled view.

from datetime import timedelta

from vendorhub.time_utils import today


def _pay(client, invoice_id, amount, **extra):
    payload = {'invoiceId': invoice_id, 'paymentAmount': amount, 'paymentDate': '2024-03-05'}
    payload.update(extra)
    return client.post('/api/payments', json=payload)


def _credit(client, invoice_id, number, amount, **extra):
    payload = {'invoiceId': invoice_id, 'crnNumber': number, 'creditAmount': amount}
    payload.update(extra)
    return client.post('/api/credit-notes', json=payload)


def _complete(client, invoice_id):
    response = client.get('/api/invoices-complete')
    assert response.status_code == 200
    matches = [i for i in response.json['invoices'] if i['id'] == invoice_id]
    assert len(matches) == 1
    return matches[0]


class TestUpsertInvoice:

    def test_create_invoice(self, client, vendor, invoice):
        assert invoice['vendorId'] == vendor['id']
        assert invoice['invoiceNumber'] == 'INV-001'
        assert invoice['invoiceAmount'] == 1000.0
        assert invoice['totalItems'] == 40
        assert invoice['vendorName'] == 'Fresh Farms Co.'
        assert invoice['dueDate'] is None

    def test_same_number_updates_existing(self, client, vendor, invoice):
        response = client.post('/api/invoices', json={
            'vendorId': vendor['id'],
            'invoiceNumber': 'INV-001',
            'invoiceDate': '2024-03-02',
            'invoiceAmount': 1200,
            'dueDate': '2024-04-01',
        })
        assert response.status_code == 200
        assert response.json['action'] == 'updated'
        updated = response.json['invoice']
        assert updated['id'] == invoice['id']
        assert updated['invoiceAmount'] == 1200.0
        assert updated['invoiceDate'] == '2024-03-02'
        assert updated['dueDate'] == '2024-04-01'
        assert len(client.get('/api/invoices-complete').json['invoices']) == 1

    def test_same_number_other_vendor_is_new(self, client, vendor, invoice):
        other = client.post('/api/vendors', json={'name': 'Dairy Delights'}).json['vendor']
        response = client.post('/api/invoices', json={
            'vendorId': other['id'],
            'invoiceNumber': 'INV-001',
            'invoiceDate': '2024-03-02',
            'invoiceAmount': 50,
        })
        assert response.status_code == 201
        assert response.json['action'] == 'created'
        assert response.json['invoice']['id'] != invoice['id']

    def test_unknown_vendor(self, client):
        response = client.post('/api/invoices', json={
            'vendorId': 9999, 'invoiceNumber': 'X', 'invoiceDate': '2024-03-01', 'invoiceAmount': 1,
        })
        assert response.status_code == 404

    def test_invalid_amount(self, client, vendor):
        response = client.post('/api/invoices', json={
            'vendorId': vendor['id'], 'invoiceNumber': 'X', 'invoiceDate': '2024-03-01', 'invoiceAmount': 'lots',
        })
        assert response.status_code == 400

    def test_delete_invoice(self, client, invoice):
        _pay(client, invoice['id'], 100)
        _credit(client, invoice['id'], 'CRN-1', 10)
        response = client.delete(f"/api/invoices/{invoice['id']}")
        assert response.status_code == 200
        assert client.get('/api/invoices-complete').json['invoices'] == []
        counts = client.get('/health').json['database']
        assert counts['payments'] == 0
        assert counts['creditNotes'] == 0

    def test_delete_missing_invoice(self, client):
        response = client.delete('/api/invoices/9999')
        assert response.status_code == 404
        assert response.json['error'] == 'Invoice not found'


class TestPayments:

    def test_payment_returns_reconciled_invoice(self, client, invoice):
        response = _pay(client, invoice['id'], 300, paymentMethod='cheque',
                        chequeNumber='000123', chequeDate='2024-03-04', notes='first instalment')
        assert response.status_code == 201
        body = response.json
        assert body['action'] == 'created'
        assert body['payment']['paymentAmount'] == 300.0
        assert body['payment']['chequeNumber'] == '000123'
        assert body['payment']['notes'] == 'first instalment'
        assert body['invoice']['paymentStatus'] == 'partial'
        assert body['invoice']['outstanding'] == 700.0

    def test_same_day_payments_are_both_kept(self, client, invoice):
        _pay(client, invoice['id'], 300)
        _pay(client, invoice['id'], 300)
        reconciled = _complete(client, invoice['id'])
        assert len(reconciled['payments']) == 2
        assert reconciled['paymentAmount'] == 600.0
        assert reconciled['outstanding'] == 400.0

    def test_payment_for_unknown_invoice(self, client):
        response = _pay(client, 9999, 10)
        assert response.status_code == 404

    def test_zero_payment_rejected(self, client, invoice):
        response = _pay(client, invoice['id'], 0)
        assert response.status_code == 400

    def test_delete_payment(self, client, invoice):
        payment = _pay(client, invoice['id'], 1000).json['payment']
        assert _complete(client, invoice['id'])['paymentStatus'] == 'paid'

        assert client.delete(f"/api/payments/{payment['id']}").status_code == 200
        reconciled = _complete(client, invoice['id'])
        assert reconciled['payments'] == []
        assert reconciled['paymentStatus'] == 'pending'
        assert client.delete(f"/api/payments/{payment['id']}").status_code == 404


class TestCreditNotes:

    def test_credit_note_reduces_outstanding(self, client, invoice):
        response = _credit(client, invoice['id'], 'CRN-001', 150, itemsReturned=3, returnReason='damaged')
        assert response.status_code == 201
        body = response.json
        assert body['creditNote']['crnNumber'] == 'CRN-001'
        assert body['creditNote']['creditDate'] == today().isoformat()
        assert body['invoice']['totalCredits'] == 150.0
        assert body['invoice']['outstanding'] == 850.0

    def test_duplicate_crn_number_conflicts(self, client, vendor, invoice):
        other = client.post('/api/invoices', json={
            'vendorId': vendor['id'], 'invoiceNumber': 'INV-002', 'invoiceDate': '2024-03-02', 'invoiceAmount': 10,
        }).json['invoice']
        assert _credit(client, invoice['id'], 'CRN-001', 10).status_code == 201
        response = _credit(client, other['id'], 'CRN-001', 5)
        assert response.status_code == 409
        assert _complete(client, other['id'])['creditNotes'] == []

    def test_credit_for_unknown_invoice(self, client):
        assert _credit(client, 9999, 'CRN-X', 5).status_code == 404

    def test_delete_credit_note(self, client, invoice):
        note = _credit(client, invoice['id'], 'CRN-001', 10).json['creditNote']
        assert client.delete(f"/api/credit-notes/{note['id']}").status_code == 200
        assert client.delete(f"/api/credit-notes/{note['id']}").status_code == 404


class TestInvoicesComplete:

    def test_paid_by_payment_and_credit(self, client, invoice):
        _pay(client, invoice['id'], 600)
        _credit(client, invoice['id'], 'CRN-001', 400)
        reconciled = _complete(client, invoice['id'])
        assert reconciled['paymentStatus'] == 'paid'
        assert reconciled['outstanding'] == 0.0
        assert reconciled['vendorContactPerson'] == 'John Miller'

    def test_overpayment_is_paid_with_negative_outstanding(self, client, invoice):
        _pay(client, invoice['id'], 1200)
        reconciled = _complete(client, invoice['id'])
        assert reconciled['paymentStatus'] == 'paid'
        assert reconciled['outstanding'] == -200.0

    def test_unpaid_past_due_is_overdue(self, client, vendor):
        due = today() - timedelta(days=1)
        created = client.post('/api/invoices', json={
            'vendorId': vendor['id'], 'invoiceNumber': 'INV-OLD', 'invoiceDate': '2024-01-01',
            'invoiceAmount': 500, 'dueDate': due.isoformat(),
        }).json['invoice']
        assert _complete(client, created['id'])['paymentStatus'] == 'overdue'

    def test_part_paid_past_due_is_partial(self, client, vendor):
        due = today() - timedelta(days=1)
        created = client.post('/api/invoices', json={
            'vendorId': vendor['id'], 'invoiceNumber': 'INV-OLD', 'invoiceDate': '2024-01-01',
            'invoiceAmount': 500, 'dueDate': due.isoformat(),
        }).json['invoice']
        _pay(client, created['id'], 100)
        assert _complete(client, created['id'])['paymentStatus'] == 'partial'

    def test_due_today_is_pending(self, client, vendor):
        created = client.post('/api/invoices', json={
            'vendorId': vendor['id'], 'invoiceNumber': 'INV-TODAY', 'invoiceDate': '2024-01-01',
            'invoiceAmount': 500, 'dueDate': today().isoformat(),
        }).json['invoice']
        assert _complete(client, created['id'])['paymentStatus'] == 'pending'

    def test_newest_invoice_first(self, client, vendor, invoice):
        client.post('/api/invoices', json={
            'vendorId': vendor['id'], 'invoiceNumber': 'INV-NEW', 'invoiceDate': '2024-06-01', 'invoiceAmount': 5,
        })
        numbers = [i['invoiceNumber'] for i in client.get('/api/invoices-complete').json['invoices']]
        assert numbers == ['INV-NEW', 'INV-001']

    def test_empty(self, client):
        response = client.get('/api/invoices-complete')
        assert response.json == {'success': True, 'invoices': []}
