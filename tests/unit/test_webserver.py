from unittest import TestCase
from ballotbox.webserver import app, client
import json


def post(path, payload):
    return app.test_client.post(path, data=json.dumps(payload))


class TestWebserver(TestCase):
    def setUp(self):
        post('/registries', {'sender': 'owner', 'name': 'election', 'title': 'Election'})

    def tearDown(self):
        client.flush()

    def seed(self):
        post('/registries/election/candidates', {'sender': 'owner', 'name': 'Alice'})
        post('/registries/election/candidates', {'sender': 'owner', 'name': 'Bob'})
        post('/registries/election/voters', {'sender': 'owner', 'address': 'v1'})
        post('/registries/election/phase', {'sender': 'owner', 'open': True})

    def test_teapot(self):
        _, response = app.test_client.get('/')
        self.assertEqual(response.status, 418)

    def test_get_registries(self):
        _, response = app.test_client.get('/registries')

        self.assertListEqual(response.json.get('registries'), ['election'])

    def test_create_duplicate_conflicts(self):
        _, response = post('/registries', {'sender': 'owner', 'name': 'election', 'title': 'Again'})

        self.assertEqual(response.status, 409)
        self.assertEqual(response.json.get('type'), 'RegistryExists')

    def test_create_malformed_payload(self):
        _, response = post('/registries', {'sender': 'owner'})

        self.assertEqual(response.status, 400)
        self.assertEqual(response.json.get('error'), 'malformed payload')

    def test_get_voting_info(self):
        _, response = app.test_client.get('/registries/election')

        self.assertEqual(response.status, 200)
        self.assertDictEqual(response.json, {
            'title': 'Election',
            'total_votes': 0,
            'candidate_count': 0,
            'is_open': False,
            'owner': 'owner',
        })

    def test_get_non_existent_registry(self):
        _, response = app.test_client.get('/registries/hoooooooopla')

        self.assertEqual(response.status, 404)
        self.assertEqual(response.json.get('error'), "Registry 'hoooooooopla' does not exist")

    def test_full_vote_flow(self):
        self.seed()

        _, response = post('/registries/election/votes', {'sender': 'v1', 'candidate_id': 2})
        self.assertEqual(response.status, 201)

        _, response = app.test_client.get('/registries/election/candidates')
        self.assertDictEqual(response.json, {'ids': [1, 2], 'names': ['Alice', 'Bob'], 'vote_counts': [0, 1]})

        _, response = app.test_client.get('/registries/election/voters/v1')
        self.assertDictEqual(response.json, {'has_voted': True, 'voted_candidate_id': 2, 'is_registered': True})

    def test_add_candidate_returns_id(self):
        _, response = post('/registries/election/candidates', {'sender': 'owner', 'name': 'Alice'})

        self.assertEqual(response.status, 201)
        self.assertEqual(response.json.get('id'), 1)

    def test_get_candidate(self):
        self.seed()

        _, response = app.test_client.get('/registries/election/candidates/1')

        self.assertDictEqual(response.json, {'id': 1, 'name': 'Alice', 'vote_count': 0})

    def test_get_candidate_out_of_range(self):
        _, response = app.test_client.get('/registries/election/candidates/0')

        self.assertEqual(response.status, 404)
        self.assertEqual(response.json.get('type'), 'InvalidCandidate')

    def test_unknown_voter_defaults(self):
        _, response = app.test_client.get('/registries/election/voters/nobody')

        self.assertDictEqual(response.json, {'has_voted': False, 'voted_candidate_id': 0, 'is_registered': False})

    def test_non_owner_forbidden(self):
        _, response = post('/registries/election/candidates', {'sender': 'mallory', 'name': 'Mallory'})

        self.assertEqual(response.status, 403)
        self.assertEqual(response.json.get('type'), 'Unauthorized')

    def test_empty_candidate_name_bad_request(self):
        _, response = post('/registries/election/candidates', {'sender': 'owner', 'name': ''})

        self.assertEqual(response.status, 400)
        self.assertEqual(response.json.get('type'), 'InvalidArgument')

    def test_vote_while_closed(self):
        post('/registries/election/candidates', {'sender': 'owner', 'name': 'Alice'})
        post('/registries/election/voters', {'sender': 'owner', 'address': 'v1'})

        _, response = post('/registries/election/votes', {'sender': 'v1', 'candidate_id': 1})

        self.assertEqual(response.status, 400)
        self.assertEqual(response.json.get('type'), 'VotingClosed')

    def test_double_vote_conflicts(self):
        self.seed()
        post('/registries/election/votes', {'sender': 'v1', 'candidate_id': 1})

        _, response = post('/registries/election/votes', {'sender': 'v1', 'candidate_id': 2})

        self.assertEqual(response.status, 409)
        self.assertEqual(response.json.get('type'), 'AlreadyVoted')

    def test_double_registration_conflicts(self):
        post('/registries/election/voters', {'sender': 'owner', 'address': 'v1'})

        _, response = post('/registries/election/voters', {'sender': 'owner', 'address': 'v1'})

        self.assertEqual(response.status, 409)

    def test_unregistered_vote(self):
        self.seed()

        _, response = post('/registries/election/votes', {'sender': 'stranger', 'candidate_id': 1})

        self.assertEqual(response.status, 400)
        self.assertEqual(response.json.get('type'), 'NotRegistered')

    def test_phase_toggle(self):
        _, response = post('/registries/election/phase', {'sender': 'owner', 'open': True})
        self.assertEqual(response.status, 200)

        _, response = app.test_client.get('/registries/election')
        self.assertTrue(response.json.get('is_open'))

    def test_vote_on_missing_registry(self):
        _, response = post('/registries/nope/votes', {'sender': 'v1', 'candidate_id': 1})

        self.assertEqual(response.status, 404)
