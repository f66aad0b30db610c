import pytest

pytestmark = pytest.mark.integration


class TestAddWaste:
    def test_plastic_then_glass(self, client, auth_headers):
        """Fresh account: Plastic gives 10/50, then Glass brings it to 17/70"""
        headers = auth_headers()

        response = client.post('/api/add-waste', json={'wasteCategory': 'Plastic'}, headers=headers)
        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok', 'rewardAdded': 10}

        user = client.get('/api/dashboard', headers=headers).get_json()['user']
        assert user['walletBalance'] == 10
        assert user['ecoPoints'] == 50
        assert len(user['logs']) == 1

        response = client.post('/api/add-waste', json={'wasteCategory': 'Glass'}, headers=headers)
        assert response.get_json() == {'status': 'ok', 'rewardAdded': 7}

        user = client.get('/api/dashboard', headers=headers).get_json()['user']
        assert user['walletBalance'] == 17
        assert user['ecoPoints'] == 70
        assert len(user['logs']) == 2

    def test_legacy_waste_type_field(self, client, auth_headers):
        headers = auth_headers()

        response = client.post('/api/add-waste', json={'wasteType': 'Non-Plastic', 'location': 'Gate 2'},
                               headers=headers)
        assert response.get_json()['rewardAdded'] == 7

        log = client.get('/api/dashboard', headers=headers).get_json()['user']['logs'][0]
        assert log['wasteType'] == 'Non-Plastic'
        assert log['location'] == 'Gate 2'
        assert log['weight'] == 0.5

    def test_missing_category_defaults_to_plastic(self, client, auth_headers):
        headers = auth_headers()

        response = client.post('/api/add-waste', json={}, headers=headers)

        assert response.get_json()['rewardAdded'] == 10

    def test_unrecognised_category_gets_default_tier(self, client, auth_headers):
        headers = auth_headers()

        response = client.post('/api/add-waste', json={'wasteCategory': 'plastic?'}, headers=headers)

        assert response.get_json()['rewardAdded'] == 7

    def test_non_string_category_rejected(self, client, auth_headers):
        headers = auth_headers()

        response = client.post('/api/add-waste', json={'wasteCategory': 42}, headers=headers)

        assert response.get_json()['status'] == 'error'

    def test_long_category_stored_truncated(self, client, auth_headers):
        """An overlong unrecognised category is still paid at the default tier"""
        headers = auth_headers()

        response = client.post('/api/add-waste', json={'wasteCategory': 'x' * 200}, headers=headers)

        assert response.get_json() == {'status': 'ok', 'rewardAdded': 7}
        log = client.get('/api/dashboard', headers=headers).get_json()['user']['logs'][0]
        assert log['wasteCategory'] == 'x' * 64

    def test_blank_category_defaults_to_plastic(self, client, auth_headers):
        headers = auth_headers()

        response = client.post('/api/add-waste', json={'wasteCategory': '   '}, headers=headers)

        assert response.get_json()['rewardAdded'] == 10

    def test_requires_token(self, client):
        response = client.post('/api/add-waste', json={'wasteCategory': 'Plastic'})

        assert response.status_code == 200
        assert response.get_json()['status'] == 'error'
        assert response.get_json()['error'] == 'Invalid Token'


class TestRedeem:
    def _fund(self, app, email, amount, points=0):
        with app.app_context():
            app.extensions['smartbin'].ledger.credit(email, amount, points, 'Manual')

    def test_insufficient_funds(self, app, client, auth_headers):
        """Wallet 5, redeem 10 money: error, balance still 5"""
        headers = auth_headers()
        self._fund(app, 'a@x.com', 5)

        response = client.post('/api/redeem', json={'item': 'Movie Ticket', 'cost': 10, 'type': 'money'},
                               headers=headers)

        body = response.get_json()
        assert response.status_code == 200
        assert body['status'] == 'error'
        assert body['message'] == 'Insufficient Funds'

        user = client.get('/api/dashboard', headers=headers).get_json()['user']
        assert user['walletBalance'] == 5
        assert user['redemptions'] == []

    def test_insufficient_points(self, app, client, auth_headers):
        headers = auth_headers()
        self._fund(app, 'a@x.com', 0, points=10)

        response = client.post('/api/redeem', json={'item': 'Reusable Bottle', 'cost': 200, 'type': 'points'},
                               headers=headers)

        assert response.get_json()['message'] == 'Insufficient Points'

    def test_successful_redeem(self, app, client, auth_headers):
        headers = auth_headers()
        self._fund(app, 'a@x.com', 60, points=300)

        response = client.post('/api/redeem', json={'item': 'Metro Card Top-up', 'cost': 50, 'type': 'money'},
                               headers=headers)
        body = response.get_json()
        assert body['status'] == 'ok'
        assert body['message'] == 'Redeemed Metro Card Top-up'

        response = client.post('/api/redeem', json={'item': 'Reusable Bottle', 'cost': 200, 'type': 'points'},
                               headers=headers)
        assert response.get_json()['status'] == 'ok'

        user = client.get('/api/dashboard', headers=headers).get_json()['user']
        assert user['walletBalance'] == 10
        assert user['ecoPoints'] == 100
        assert [r['item'] for r in user['redemptions']] == ['Metro Card Top-up', 'Reusable Bottle']

    def test_fractional_costs_spend_whole_balance(self, client, auth_headers):
        """Earn 7, redeem 6.9 then 0.1: both go through and the wallet reads 0"""
        headers = auth_headers()
        client.post('/api/add-waste', json={'wasteCategory': 'Glass'}, headers=headers)

        response = client.post('/api/redeem', json={'item': 'Snack', 'cost': 6.9, 'type': 'money'},
                               headers=headers)
        assert response.get_json()['status'] == 'ok'
        user = client.get('/api/dashboard', headers=headers).get_json()['user']
        assert user['walletBalance'] == 0.1

        response = client.post('/api/redeem', json={'item': 'Sticker', 'cost': '0.10', 'type': 'money'},
                               headers=headers)
        assert response.get_json()['status'] == 'ok'

        user = client.get('/api/dashboard', headers=headers).get_json()['user']
        assert user['walletBalance'] == 0
        assert [r['cost'] for r in user['redemptions']] == [6.9, 0.1]

    @pytest.mark.parametrize('payload', [
        {'item': 'Voucher', 'cost': -5, 'type': 'money'},
        {'item': 'Voucher', 'cost': 0, 'type': 'money'},
        {'item': 'Voucher', 'cost': 'ten', 'type': 'money'},
        {'item': 'Voucher', 'cost': 5, 'type': 'gold'},
        {'item': 'Voucher', 'cost': 2.5, 'type': 'points'},
        {'item': '', 'cost': 5, 'type': 'money'},
    ])
    def test_invalid_redeem_requests(self, app, client, auth_headers, payload):
        headers = auth_headers()
        self._fund(app, 'a@x.com', 20, points=20)

        response = client.post('/api/redeem', json=payload, headers=headers)

        assert response.get_json()['status'] == 'error'
        user = client.get('/api/dashboard', headers=headers).get_json()['user']
        assert user['walletBalance'] == 20
        assert user['ecoPoints'] == 20

    def test_catalog_enforced(self, app, client, auth_headers):
        """With the catalog enforced the server price applies, whatever the client says"""
        app.extensions['smartbin'].redemption.enforce_catalog = True
        headers = auth_headers()
        self._fund(app, 'a@x.com', 60)

        response = client.post('/api/redeem', json={'item': 'Movie Ticket', 'cost': 1, 'type': 'money'},
                               headers=headers)
        assert response.get_json()['message'] == 'Insufficient Funds'

        response = client.post('/api/redeem', json={'item': 'Free Car', 'cost': 1, 'type': 'money'},
                               headers=headers)
        assert response.get_json()['status'] == 'error'

        response = client.post('/api/redeem', json={'item': 'Metro Card Top-up', 'cost': 1, 'type': 'money'},
                               headers=headers)
        assert response.get_json()['status'] == 'ok'
        user = client.get('/api/dashboard', headers=headers).get_json()['user']
        assert user['walletBalance'] == 10

    def test_rewards_catalog_listing(self, client):
        body = client.get('/api/rewards').get_json()

        assert body['status'] == 'ok'
        items = {reward['item']: reward for reward in body['rewards']}
        assert items['Movie Ticket'] == {'item': 'Movie Ticket', 'cost': 100, 'type': 'money'}

    def test_response_keys_keep_insertion_order(self, client):
        body = client.get('/api/rewards').get_json()

        assert list(body) == ['status', 'rewards']
        assert list(body['rewards'][0]) == ['item', 'cost', 'type']


class TestDashboard:
    def test_dashboard_returns_account(self, client, auth_headers):
        headers = auth_headers()

        body = client.get('/api/dashboard', headers=headers).get_json()

        assert body['status'] == 'ok'
        assert body['user']['email'] == 'a@x.com'
        assert body['user']['name'] == 'Alice'
        assert 'passwordHash' not in body['user']

    def test_dashboard_accepts_bearer_header(self, client, auth_headers):
        token = auth_headers()['x-access-token']

        body = client.get('/api/dashboard', headers={'Authorization': f'Bearer {token}'}).get_json()

        assert body['status'] == 'ok'

    def test_summary(self, client, auth_headers):
        headers = auth_headers()
        client.post('/api/add-waste', json={'wasteCategory': 'Plastic'}, headers=headers)
        client.post('/api/add-waste', json={'wasteCategory': 'Paper'}, headers=headers)
        client.post('/api/add-waste', json={'wasteCategory': 'Plastic'}, headers=headers)

        body = client.get('/api/dashboard/summary', headers=headers).get_json()

        assert body['status'] == 'ok'
        assert body['waste'] == [{'name': 'Plastic', 'value': 2}, {'name': 'Non-Plastic', 'value': 1}]
        assert len(body['earnings']) == 7
        assert body['earnings'][-1]['earnings'] == 27
        assert body['totalScans'] == 3


class TestHealth:
    def test_health(self, client):
        body = client.get('/api/health').get_json()

        assert body['status'] == 'ok'
        assert body['database'] == 'healthy'
