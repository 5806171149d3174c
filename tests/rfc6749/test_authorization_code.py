import pytest

from fastapi_oauth_server.rfc6749 import (
    AuthorizationCodeGrant,
    InvalidClientError,
    InvalidGrantError,
    InvalidRequestError,
    InvalidScopeError,
    OAuth2Request,
    RefreshTokenGrant,
    UnsupportedResponseTypeError,
)
from fastapi_oauth_server.rfc6749.grants import AuthorizeRequest

REDIRECT_URI = 'https://client.example.com/cb'


@pytest.fixture
def grant(server):
    grant = AuthorizationCodeGrant()
    server.add_grant_type(grant)
    server.add_grant_type(RefreshTokenGrant())
    return grant


def authorize_request(**query):
    params = dict(response_type='code', client_id='client-1', redirect_uri=REDIRECT_URI, state='xyz')
    params.update(query)
    return OAuth2Request(method='GET', uri='https://server.example.com/authorize', query=params)


async def issue_code(server, grant, **query):
    context = server.create_context(authorize_request(**query))
    params = await grant.check_authorize_params(context)
    return await grant.new_authorize_request(context, 'user', 'user-1', params)


@pytest.mark.asyncio
async def test_check_authorize_params(server, grant):
    context = server.create_context(authorize_request(scope='email profile'))
    params = await grant.check_authorize_params(context)

    assert isinstance(params, AuthorizeRequest)
    assert params.client_id == 'client-1'
    assert params.redirect_uri == REDIRECT_URI
    assert params.response_type == 'code'
    assert params.state == 'xyz'
    assert [scope.get_scope() for scope in params.scopes] == ['email', 'profile']


@pytest.mark.asyncio
async def test_check_authorize_params_errors(server, grant):
    with pytest.raises(InvalidRequestError) as exc_info:
        await grant.check_authorize_params(server.create_context(authorize_request(client_id='')))
    assert exc_info.value.detail == 'client_id'

    with pytest.raises(UnsupportedResponseTypeError):
        await grant.check_authorize_params(server.create_context(authorize_request(response_type='token')))

    with pytest.raises(InvalidClientError):
        await grant.check_authorize_params(server.create_context(
            authorize_request(redirect_uri='https://evil.example.com/cb'),
        ))

    with pytest.raises(InvalidScopeError):
        await grant.check_authorize_params(server.create_context(authorize_request(scope='admin')))


@pytest.mark.asyncio
async def test_required_state(server, grant):
    server.require_state_param = True
    with pytest.raises(InvalidRequestError) as exc_info:
        await grant.check_authorize_params(server.create_context(authorize_request(state='')))
    assert exc_info.value.detail == 'state'


@pytest.mark.asyncio
async def test_exchange_code(server, grant, storages, token_request, now):
    code = await issue_code(server, grant, scope='email')
    stored = storages.auth_code.codes[code]
    assert now + 600 <= stored.get_expires_at() <= now + 602

    request = token_request(
        grant_type='authorization_code',
        client_id='client-1',
        client_secret='secret-1',
        redirect_uri=REDIRECT_URI,
        code=code,
    )
    token = await server.issue_access_token(request)

    assert token['scope'] == 'email'
    assert token['refresh_token'] in storages.refresh_token.tokens
    assert request.session.get_owner_id() == 'user-1'
    assert request.credential is stored
    assert code not in storages.auth_code.codes


@pytest.mark.asyncio
async def test_code_is_single_use(server, grant, token_request):
    code = await issue_code(server, grant)
    params = dict(
        grant_type='authorization_code',
        client_id='client-1',
        client_secret='secret-1',
        redirect_uri=REDIRECT_URI,
        code=code,
    )
    await server.issue_access_token(token_request(**params))

    with pytest.raises(InvalidGrantError) as exc_info:
        await server.issue_access_token(token_request(**params))
    assert exc_info.value.detail == 'code'


@pytest.mark.asyncio
async def test_expired_code(server, grant, storages, token_request):
    code = await issue_code(server, grant)
    storages.auth_code.codes[code].expires_at = 0

    request = token_request(
        grant_type='authorization_code',
        client_id='client-1',
        client_secret='secret-1',
        redirect_uri=REDIRECT_URI,
        code=code,
    )
    with pytest.raises(InvalidGrantError):
        await server.issue_access_token(request)


@pytest.mark.asyncio
async def test_missing_parameters(server, grant, token_request):
    with pytest.raises(InvalidRequestError) as exc_info:
        await server.issue_access_token(token_request(
            grant_type='authorization_code',
            client_id='client-1',
            client_secret='secret-1',
            code='abc',
        ))
    assert exc_info.value.detail == 'redirect_uri'

    with pytest.raises(InvalidRequestError) as exc_info:
        await server.issue_access_token(token_request(
            grant_type='authorization_code',
            client_id='client-1',
            client_secret='secret-1',
            redirect_uri=REDIRECT_URI,
        ))
    assert exc_info.value.detail == 'code'


@pytest.mark.asyncio
async def test_unregistered_redirect_uri(server, grant, token_request):
    code = await issue_code(server, grant)
    request = token_request(
        grant_type='authorization_code',
        client_id='client-1',
        client_secret='secret-1',
        redirect_uri='https://evil.example.com/cb',
        code=code,
    )
    with pytest.raises(InvalidClientError):
        await server.issue_access_token(request)
