"""
Tests for the import endpoint.
Run with: pytest tests/test_app.py
"""

import sys
import os
from unittest.mock import patch

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from app import app
from models import ImportedIngredient, ImportedRecipe, ImportedStep
from services import NetworkFault, OriginHttpFault, UnknownFetchFault
from utils import InvalidInput

URL = 'https://example.com/recipes/tacos'


@pytest.fixture
def client():
    app.config['TESTING'] = True
    app.config['IMPORT_BLOCK_PRIVATE_HOSTS'] = False
    with app.test_client() as client:
        yield client


def _recipe():
    return ImportedRecipe(
        title='Tacos',
        servings=2,
        ingredients=[ImportedIngredient(name='tortillas', amount=4)],
        steps=[ImportedStep(instruction='Warm the tortillas.')],
        source_url=URL,
    )


def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


def test_import_success(client):
    with patch('app.import_from_url', return_value=_recipe()) as mock_import:
        response = client.post('/recipe/import', json={'url': URL})

    assert response.status_code == 200
    recipe = response.get_json()['recipe']
    assert recipe['title'] == 'Tacos'
    assert recipe['servings'] == 2
    assert recipe['ingredients'] == [{'name': 'tortillas', 'amount': 4, 'unit': None, 'notes': None}]
    assert recipe['steps'] == [{'instruction': 'Warm the tortillas.', 'timer_seconds': None}]
    assert recipe['source_url'] == URL
    assert mock_import.call_args[0][0] == URL
    assert mock_import.call_args[1]['timeout'] == 15
    assert mock_import.call_args[1]['max_redirects'] == 5


def test_import_accepts_form_field(client):
    with patch('app.import_from_url', return_value=_recipe()):
        response = client.post('/recipe/import', data={'url': URL})
    assert response.status_code == 200


def test_missing_url(client):
    response = client.post('/recipe/import', json={})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'URL required'


def test_rejects_non_http_scheme(client):
    with patch('app.import_from_url') as mock_import:
        response = client.post('/recipe/import', json={'url': 'ftp://example.com/recipe'})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Only HTTP/HTTPS URLs allowed'
    mock_import.assert_not_called()


def test_network_fault(client):
    with patch('app.import_from_url', side_effect=NetworkFault('connection_refused', URL)):
        response = client.post('/recipe/import', json={'url': URL})
    assert response.status_code == 422
    body = response.get_json()
    assert body['kind'] == 'network'
    assert 'Could not reach the URL' in body['error']


def test_tls_fault_has_its_own_message(client):
    with patch('app.import_from_url', side_effect=NetworkFault('tls_error', URL)):
        response = client.post('/recipe/import', json={'url': URL})
    assert response.status_code == 422
    assert 'SSL certificate' in response.get_json()['error']


def test_origin_http_fault(client):
    with patch('app.import_from_url', side_effect=OriginHttpFault(403, URL)):
        response = client.post('/recipe/import', json={'url': URL})
    assert response.status_code == 422
    body = response.get_json()
    assert body['kind'] == 'origin_http'
    assert 'HTTP 403' in body['error']


def test_unknown_fault(client):
    with patch('app.import_from_url', side_effect=UnknownFetchFault('Too many redirects', URL)):
        response = client.post('/recipe/import', json={'url': URL})
    assert response.status_code == 422
    assert response.get_json()['kind'] == 'unknown'


# ============================================
# PRIVATE HOSTS
# ============================================

PUBLIC_IP_URL = 'http://93.184.216.34/recipes/tacos'


@pytest.fixture
def guarded_client(client):
    app.config['IMPORT_BLOCK_PRIVATE_HOSTS'] = True
    yield client
    app.config['IMPORT_BLOCK_PRIVATE_HOSTS'] = False


def test_rejects_private_host(guarded_client):
    with patch('app.import_from_url') as mock_import:
        response = guarded_client.post('/recipe/import', json={'url': 'http://127.0.0.1/recipe'})
    assert response.status_code == 400
    mock_import.assert_not_called()


def test_redirect_targets_are_checked(guarded_client):
    with patch('app.import_from_url', return_value=_recipe()) as mock_import:
        response = guarded_client.post('/recipe/import', json={'url': PUBLIC_IP_URL})
    assert response.status_code == 200

    redirect_check = mock_import.call_args[1]['redirect_check']
    redirect_check('https://93.184.216.34/recipes/tacos-2')
    with pytest.raises(InvalidInput):
        redirect_check('http://192.168.1.1/router')


def test_redirect_to_private_host_is_refused(guarded_client):
    refused = InvalidInput('Cannot import from private/internal IP: 10.0.0.8')
    with patch('app.import_from_url', side_effect=refused):
        response = guarded_client.post('/recipe/import', json={'url': PUBLIC_IP_URL})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Cannot import from private/internal IP: 10.0.0.8'


def test_no_redirect_check_when_private_hosts_allowed(client):
    with patch('app.import_from_url', return_value=_recipe()) as mock_import:
        client.post('/recipe/import', json={'url': URL})
    assert mock_import.call_args[1]['redirect_check'] is None
