"""API tests using FastAPI TestClient."""

from fastapi.testclient import TestClient

import main
from main import app

client = TestClient(app)


def test_examples():
    r = client.get('/api/examples')
    assert r.status_code == 200
    assert 'sum' in r.json()


def test_compile_returns_tokens_and_ast():
    r = client.post('/api/compile', json={'code': '20 PRINT X\n10 LET X = 2 * 3'})
    data = r.json()
    assert data['success'] is True
    assert list(data['ast']['lines']) == ['10', '20']
    assert data['ast']['lines']['10'] == {
        'type': 'LetStatement',
        'var': 'X',
        'expr': {
            'type': 'BinaryOp', 'op': '*',
            'left': {'type': 'Constant', 'value': 2},
            'right': {'type': 'Constant', 'value': 3},
        },
    }
    assert data['tokens'][0] == {'type': 'NUMBER', 'value': 20, 'line': 1, 'column': 1}


def test_compile_error():
    r = client.post('/api/compile', json={'code': '10 LET X 5'})
    data = r.json()
    assert data['success'] is False
    assert data['errors'][0].startswith('MalformedAssignError: Linha 1:')


def test_unknown_character_is_a_compile_error():
    r = client.post('/api/compile', json={'code': '10 PRINT ²'})
    assert r.status_code == 200
    data = r.json()
    assert data['success'] is False
    assert data['errors'][0].startswith('IllegalTermError')


def test_run_with_inputs():
    code = client.get('/api/examples').json()['sum']['code']
    r = client.post('/api/run', json={'code': code, 'inputs': [2, '3']})
    data = r.json()
    assert data['success'] is True
    assert data['output'] == ['5']
    assert data['variables'] == {'A': 2, 'B': 3, 'C': 5}


def test_run_missing_input():
    r = client.post('/api/run', json={'code': '10 INPUT A\n20 PRINT A'})
    data = r.json()
    assert data['success'] is False
    assert data['error'].startswith('InputError')


def test_run_step_limit_is_capped(monkeypatch):
    monkeypatch.setattr(main.settings, 'max_steps', 100)
    r = client.post('/api/run', json={'code': '10 PRINT 1\n20 GOTO 10', 'max_steps': 10**9})
    data = r.json()
    assert data['success'] is False
    assert data['error'].startswith('StepLimitError')
    assert len(data['output']) == 50
