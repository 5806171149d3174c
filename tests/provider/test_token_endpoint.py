import logging

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from fastapi_oauth_server import AuthorizationServer, OAuth2Request
from fastapi_oauth_server.rfc6749 import (
    ClientCredentialsGrant,
    RefreshTokenGrant,
    ResourceOwnerPasswordCredentialsGrant,
    ServerError,
    StorageRegistry,
)


async def verify_credentials(username, password):
    if (username, password) == ('alice', 'wonderland'):
        return 'user-1'
    return None


@pytest.fixture
def oauth_server(config, storages):
    server = AuthorizationServer(config=config, storages=storages)
    server.add_grant_type(ClientCredentialsGrant())
    server.add_grant_type(ResourceOwnerPasswordCredentialsGrant(verify_credentials))
    server.add_grant_type(RefreshTokenGrant())
    return server


@pytest.fixture
def app(oauth_server):
    app = FastAPI()
    oauth_server.init_app(app)
    app.include_router(oauth_server.create_token_router())

    @app.post('/echo')
    async def echo(request: OAuth2Request = Depends(oauth_server.get_oauth_request)):
        return {'grant_type': request.grant_type, 'scope': request.scope}

    return app


@pytest.fixture
def http_client(app):
    return TestClient(app)


def test_issue_token(http_client):
    resp = http_client.post('/oauth/token', data={
        'grant_type': 'client_credentials',
        'client_id': 'client-1',
        'client_secret': 'secret-1',
    })
    assert resp.status_code == 200
    assert resp.headers['cache-control'] == 'no-store'
    assert resp.headers['pragma'] == 'no-cache'

    data = resp.json()
    assert data['token_type'] == 'Bearer'
    assert data['scope'] == 'basic'
    assert data['expires_in'] == 3600
    assert 'refresh_token' not in data


def test_issue_and_refresh_token(http_client):
    resp = http_client.post('/oauth/token', data={
        'grant_type': 'password',
        'client_id': 'client-1',
        'client_secret': 'secret-1',
        'username': 'alice',
        'password': 'wonderland',
        'scope': 'email',
    })
    assert resp.status_code == 200
    refresh_token = resp.json()['refresh_token']

    resp = http_client.post(
        '/oauth/token',
        data={'grant_type': 'refresh_token', 'refresh_token': refresh_token},
        auth=('client-1', 'secret-1'),
    )
    assert resp.status_code == 200
    assert resp.json()['scope'] == 'email'


def test_missing_grant_type(http_client):
    resp = http_client.post('/oauth/token', data={'client_id': 'client-1'})
    assert resp.status_code == 400
    data = resp.json()
    assert data['error'] == 'invalid_request'
    assert 'grant_type' in data['error_description']


def test_grant_type_in_query_is_ignored(http_client):
    resp = http_client.post('/oauth/token?grant_type=client_credentials', data={'client_id': 'client-1'})
    assert resp.status_code == 400
    assert resp.json()['error'] == 'invalid_request'


def test_unsupported_grant_type(http_client):
    resp = http_client.post('/oauth/token', data={'grant_type': 'foo'})
    assert resp.status_code == 501
    data = resp.json()
    assert data['error'] == 'unsupported_grant_type'
    assert '"foo"' in data['error_description']


def test_invalid_client_with_basic(http_client):
    resp = http_client.post(
        '/oauth/token',
        data={'grant_type': 'client_credentials'},
        auth=('client-1', 'wrong'),
    )
    assert resp.status_code == 401
    assert resp.json()['error'] == 'invalid_client'
    assert resp.headers['www-authenticate'] == 'Basic realm=""'


def test_invalid_client_without_challenge(http_client):
    resp = http_client.post('/oauth/token', data={
        'grant_type': 'client_credentials',
        'client_id': 'client-1',
        'client_secret': 'wrong',
    })
    assert resp.status_code == 401
    assert 'www-authenticate' not in resp.headers


def test_server_error(config, storages, caplog):
    app = FastAPI()
    server = AuthorizationServer(app, config=config, storages=storages)
    server.add_grant_type(ResourceOwnerPasswordCredentialsGrant())
    app.include_router(server.create_token_router('/token'))

    with caplog.at_level(logging.ERROR, logger='fastapi_oauth_server'):
        resp = TestClient(app).post('/token', data={
            'grant_type': 'password',
            'client_id': 'client-1',
            'client_secret': 'secret-1',
            'username': 'alice',
            'password': 'wonderland',
        })

    assert resp.status_code == 500
    data = resp.json()
    assert data['error'] == 'server_error'
    assert 'verifier' not in data['error_description']
    assert 'No credentials verifier' in caplog.text


def test_init_app_validates_storages(storages):
    server = AuthorizationServer(storages=StorageRegistry(client=storages.client, scope=storages.scope))
    server.add_grant_type(ClientCredentialsGrant())
    with pytest.raises(ServerError):
        server.init_app(FastAPI())


def test_oauth_request_dependency(http_client):
    resp = http_client.post('/echo?scope=email', data={'grant_type': 'password'})
    assert resp.json() == {'grant_type': 'password', 'scope': 'email'}
