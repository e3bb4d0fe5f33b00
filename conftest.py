import json

import httpx
import pytest

SHEET_URL = 'https://sheet.test/exec'

STUDENTS = [
    {'id': '10001', 'prefix': 'ด.ช.', 'firstName': 'สมชาย', 'lastName': 'ใจดี', 'room': '1', 'number': 1, 'score': 18},
    {'id': '10003', 'prefix': 'ด.ญ.', 'firstName': 'สมหญิง', 'lastName': 'รักเรียน', 'room': '1', 'number': 3, 'score': 18},
    {'id': '10002', 'prefix': 'ด.ช.', 'firstName': 'มานะ', 'lastName': 'อดทน', 'room': '1', 'number': 2, 'score': 15},
    {'id': '20001', 'prefix': 'ด.ญ.', 'firstName': 'ปิติ', 'lastName': 'ยินดี', 'room': '2', 'number': 1, 'score': 9, 'status': ''},
    {'id': '20002', 'prefix': 'ด.ช.', 'firstName': 'วีระ', 'lastName': 'กล้าหาญ', 'room': '2', 'number': 2, 'score': 12, 'status': 'ดีเลิศมากๆ'},
]


class FakeRedis:
    """Dict-backed stand-in for the token blacklist"""

    def __init__(self):
        self.values = {}

    def setex(self, key, ttl, value):
        self.values[key] = value

    def get(self, key):
        return self.values.get(key)


class FakeSheet:
    """Plays the Apps Script web app behind an httpx.MockTransport."""

    def __init__(self, payload=None):
        self.payload = payload if payload is not None else {
            'config': {'examName': 'สอบกลางภาค', 'maxScore': 20},
            'students': STUDENTS,
        }
        self.read_status = 200
        self.write_status = 200
        self.posted = []

    def handler(self, request):
        if request.method == 'GET':
            if self.read_status != 200:
                return httpx.Response(self.read_status, text='error')
            return httpx.Response(200, json=self.payload)
        self.posted.append({'headers': dict(request.headers), 'body': json.loads(request.content)})
        return httpx.Response(self.write_status, json={'ok': self.write_status == 200})

    def client(self):
        from sheet_client import SheetClient
        return SheetClient(SHEET_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def sheet():
    return FakeSheet()


@pytest.fixture
def app(sheet, monkeypatch):
    import decorators
    from app import create_app

    application = create_app('testing', sheet_client=sheet.client())
    monkeypatch.setattr(decorators, 'redis_client', FakeRedis())
    application.extensions['roster_store'].refresh()
    return application


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def teacher_headers(client):
    resp = client.post('/api/auth/login', json={'password': '2521'})
    token = resp.get_json()['data']['access_token']
    return {'Authorization': f'Bearer {token}'}
