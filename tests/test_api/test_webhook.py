from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_conversion_service, get_telegram_client
from api.main import app
from config.settings import Settings, get_settings
from domain.exceptions.currency import ProviderError, StorageError, TransportError

SECRET = 's3cret'


def text_update(text, chat_id=555, user_id=1001, kind='message'):
    return {
        'update_id': 1,
        kind: {
            'message_id': 10,
            'date': 1730800000,
            'chat': {'id': chat_id, 'type': 'private'},
            'from': {'id': user_id, 'is_bot': False, 'first_name': 'Test'},
            'text': text,
        },
    }


@pytest.fixture
def mock_conversion_service():
    service = MagicMock()
    service.handle_text = AsyncMock(return_value='54.25 USD 🍎 2,243.5 UAH')
    return service


@pytest.fixture
def mock_telegram():
    telegram = MagicMock()
    telegram.send_message = AsyncMock(return_value={'message_id': 11})
    return telegram


@pytest.fixture
def client(mock_conversion_service, mock_telegram):
    app.dependency_overrides[get_settings] = lambda: Settings(WEBHOOK_SECRET=SECRET)
    app.dependency_overrides[get_conversion_service] = lambda: mock_conversion_service
    app.dependency_overrides[get_telegram_client] = lambda: mock_telegram
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def test_text_message_gets_reply(client, mock_conversion_service, mock_telegram):
    response = client.post(f'/webhook?secret={SECRET}', json=text_update('50eur'))

    assert response.status_code == 200
    assert response.json() == {'ok': True, 'replied': True}
    mock_conversion_service.handle_text.assert_awaited_once_with('50eur', 1001)
    mock_telegram.send_message.assert_awaited_once_with(555, '54.25 USD 🍎 2,243.5 UAH')


def test_channel_post_without_sender(client, mock_conversion_service, mock_telegram):
    update = text_update('50eur', chat_id=-100123, kind='channel_post')
    del update['channel_post']['from']

    response = client.post(f'/webhook?secret={SECRET}', json=update)

    assert response.status_code == 200
    mock_conversion_service.handle_text.assert_awaited_once_with('50eur', None)
    mock_telegram.send_message.assert_awaited_once_with(-100123, '54.25 USD 🍎 2,243.5 UAH')


def test_non_request_text_is_silent(client, mock_conversion_service, mock_telegram):
    mock_conversion_service.handle_text.return_value = None

    response = client.post(f'/webhook?secret={SECRET}', json=text_update('hello there'))

    assert response.status_code == 200
    assert response.json() == {'ok': True, 'replied': False}
    mock_telegram.send_message.assert_not_called()


def test_update_without_text_is_ignored(client, mock_conversion_service, mock_telegram):
    update = {'update_id': 2, 'message': {'message_id': 3, 'chat': {'id': 1}, 'sticker': {}}}

    response = client.post(f'/webhook?secret={SECRET}', json=update)

    assert response.status_code == 200
    assert response.json() == {'ok': True, 'replied': False}
    mock_conversion_service.handle_text.assert_not_called()


def test_unhandled_update_kind_is_ignored(client, mock_conversion_service):
    response = client.post(f'/webhook?secret={SECRET}', json={'update_id': 3, 'callback_query': {'id': 'x'}})

    assert response.status_code == 200
    mock_conversion_service.handle_text.assert_not_called()


@pytest.mark.parametrize('query', ['', '?secret=wrong', '?secret='])
def test_wrong_secret_is_rejected(client, mock_conversion_service, query):
    response = client.post(f'/webhook{query}', json=text_update('50eur'))

    assert response.status_code == 403
    assert response.json() == {'detail': 'Not allowed'}
    mock_conversion_service.handle_text.assert_not_called()


def test_wrong_secret_rejected_before_body_is_read(client):
    response = client.post('/webhook?secret=wrong', content=b'not json')

    assert response.status_code == 403


def test_unconfigured_secret_rejects_everything(client, mock_conversion_service):
    app.dependency_overrides[get_settings] = lambda: Settings(WEBHOOK_SECRET='')

    response = client.post('/webhook?secret=', json=text_update('50eur'))

    assert response.status_code == 403
    mock_conversion_service.handle_text.assert_not_called()


def test_malformed_body_is_bad_request(client):
    response = client.post(f'/webhook?secret={SECRET}', content=b'not json')

    assert response.status_code == 400


def test_provider_error_returns_503_without_reply(client, mock_conversion_service, mock_telegram):
    mock_conversion_service.handle_text.side_effect = ProviderError('HTTP 500', status_code=500)

    response = client.post(f'/webhook?secret={SECRET}', json=text_update('50eur'))

    assert response.status_code == 503
    assert response.json() == {'detail': 'Exchange rate service unavailable'}
    mock_telegram.send_message.assert_not_called()


def test_storage_error_returns_503_without_reply(client, mock_conversion_service, mock_telegram):
    mock_conversion_service.handle_text.side_effect = StorageError('insert failed')

    response = client.post(f'/webhook?secret={SECRET}', json=text_update('50eur'))

    assert response.status_code == 503
    mock_telegram.send_message.assert_not_called()


def test_transport_error_returns_503(client, mock_telegram):
    mock_telegram.send_message.side_effect = TransportError('blocked')

    response = client.post(f'/webhook?secret={SECRET}', json=text_update('50eur'))

    assert response.status_code == 503
    assert response.json() == {'detail': 'Reply could not be delivered'}


def test_health(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.json() == {'status': 'ok'}
