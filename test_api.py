"""
Tests for the StepCalc web API
"""
import unittest
from unittest import mock

import api


class TestApi(unittest.TestCase):

    def setUp(self):
        api.sessions.clear()
        self.client = api.app.test_client()

    def create_session(self):
        response = self.client.post('/api/sessions')
        self.assertEqual(response.status_code, 201)
        return response.get_json()['data']['id']

    def press(self, session_id, *keys):
        data = None
        for key in keys:
            if key in "0123456789.":
                response = self.client.post(f'/api/sessions/{session_id}/digit', json={'digit': key})
            else:
                response = self.client.post(f'/api/sessions/{session_id}/operation', json={'symbol': key})
            self.assertEqual(response.status_code, 200)
            data = response.get_json()['data']
        return data

    def test_api_info(self):
        response = self.client.get('/api')
        payload = response.get_json()
        self.assertTrue(payload['success'])
        self.assertIn('POST /api/sessions', payload['data']['endpoints'])

    def test_operations(self):
        payload = self.client.get('/api/operations').get_json()
        self.assertTrue(payload['success'])
        self.assertIn('÷', payload['data']['binary'])
        self.assertIn('√', payload['data']['unary'])

    def test_create_session(self):
        response = self.client.post('/api/sessions')
        payload = response.get_json()
        self.assertEqual(response.status_code, 201)
        self.assertTrue(payload['success'])
        self.assertEqual(payload['data']['display'], ' ')
        self.assertIn(payload['data']['id'], api.sessions)

    def test_calculation(self):
        session_id = self.create_session()
        data = self.press(session_id, '3', '+', '5', '=')
        self.assertEqual(data['display'], '8')
        self.assertEqual(data['description'], '3+5=')
        self.assertFalse(data['is_pending'])
        self.assertEqual(data['steps'], ['3.0', '+', '5.0', '='])

        data = self.client.get(f'/api/sessions/{session_id}').get_json()['data']
        self.assertEqual(data['display'], '8')
        self.assertEqual(data['id'], session_id)

    def test_sessions_are_independent(self):
        first = self.create_session()
        second = self.create_session()
        self.press(first, '9', '√')
        data = self.client.get(f'/api/sessions/{second}').get_json()['data']
        self.assertEqual(data['steps'], [])

    def test_division_by_zero(self):
        session_id = self.create_session()
        data = self.press(session_id, '1', '÷', '0', '=')
        self.assertEqual(data['display'], 'Error: division by zero')
        self.assertEqual(data['error'], '÷: division by zero (1, 0)')
        self.assertEqual(len(data['steps']), 4)

    def test_memory_erase_and_clean(self):
        session_id = self.create_session()
        self.press(session_id, '2', '×')
        response = self.client.post(f'/api/sessions/{session_id}/memory/recall')
        self.assertEqual(response.get_json()['data']['description'], '2×M...')

        self.press(session_id, '=', '4')
        response = self.client.post(f'/api/sessions/{session_id}/memory/store')
        data = response.get_json()['data']
        self.assertEqual(data['memory'], {'M': 4.0})
        self.assertEqual(data['display'], '8')

        response = self.client.post(f'/api/sessions/{session_id}/erase')
        self.assertEqual(response.get_json()['data']['description'], '2×M...')

        response = self.client.post(f'/api/sessions/{session_id}/clean')
        data = response.get_json()['data']
        self.assertEqual(data['steps'], [])
        self.assertEqual(data['memory'], {})

    def test_unknown_session(self):
        response = self.client.get('/api/sessions/missing')
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.get_json()['success'])

        response = self.client.post('/api/sessions/missing/digit', json={'digit': '1'})
        self.assertEqual(response.status_code, 404)

    def test_bad_input(self):
        session_id = self.create_session()
        response = self.client.post(f'/api/sessions/{session_id}/digit', json={'digit': 'x'})
        self.assertEqual(response.status_code, 400)

        response = self.client.post(f'/api/sessions/{session_id}/operation', json={})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['error'], "Missing field 'symbol'")

        response = self.client.post(f'/api/sessions/{session_id}/digit', data='7')
        self.assertEqual(response.status_code, 400)

    def test_oldest_session_is_evicted(self):
        with mock.patch.object(api.config, 'MAX_SESSIONS', 2):
            first = self.create_session()
            second = self.create_session()
            third = self.create_session()

        self.assertEqual(list(api.sessions), [second, third])
        response = self.client.get(f'/api/sessions/{first}')
        self.assertEqual(response.status_code, 404)

    def test_delete_session(self):
        session_id = self.create_session()
        response = self.client.delete(f'/api/sessions/{session_id}')
        self.assertEqual(response.status_code, 200)
        self.assertNotIn(session_id, api.sessions)

        response = self.client.delete(f'/api/sessions/{session_id}')
        self.assertEqual(response.status_code, 404)


if __name__ == '__main__':
    unittest.main()
