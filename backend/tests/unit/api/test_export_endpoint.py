"""
Unit Tests for POST /portfolios/{id}/export
"""
import pytest
from httpx import AsyncClient


@pytest.fixture
async def portfolio(client: AsyncClient, auth_headers) -> dict:
    created = (await client.post(
        '/api/v1/portfolios', json={'title': 'Dev Portfolio'}, headers=auth_headers
    )).json()['portfolio']
    await client.put(f"/api/v1/portfolios/{created['id']}", json={
        'name': 'Jane <Doe>',
        'email': 'jane@example.com',
        'about': {'content': 'Builds APIs'},
        'skills': [{'name': 'Python'}, {'name': 'Go'}],
        'projects': [{'title': 'DevLink', 'description': 'Portfolio builder'}],
    }, headers=auth_headers)
    return created


class TestExport:

    async def test_export_pdf(self, client: AsyncClient, portfolio):
        response = await client.post(
            f"/api/v1/portfolios/{portfolio['id']}/export", json={'format': 'pdf'}
        )

        assert response.status_code == 200
        assert response.headers['content-type'] == 'application/pdf'
        assert response.headers['content-disposition'] == 'attachment; filename="Jane Doe.pdf"'
        assert int(response.headers['content-length']) == len(response.content)
        assert response.content.startswith(b'%PDF')

    async def test_export_html(self, client: AsyncClient, portfolio):
        response = await client.post(
            f"/api/v1/portfolios/{portfolio['id']}/export", json={'format': 'html'}
        )

        assert response.status_code == 200
        assert response.headers['content-type'].startswith('text/html')
        assert response.headers['content-disposition'] == 'attachment; filename="Jane Doe.html"'
        body = response.text
        assert '<h1>Jane &lt;Doe&gt;</h1>' in body
        assert '<span class="skill">Python</span><span class="skill">Go</span>' in body
        assert '<h3>1. DevLink</h3>' in body
        assert '<strong>Phone:</strong> N/A' in body

    async def test_export_needs_no_session(self, client: AsyncClient, portfolio):
        # Still private; export is reachable by id alone
        assert portfolio['is_public'] is False

        response = await client.post(
            f"/api/v1/portfolios/{portfolio['id']}/export", json={'format': 'html'}
        )

        assert response.status_code == 200

    @pytest.mark.parametrize('body', [{'format': 'docx'}, {'format': 'PDF'}, {}])
    async def test_invalid_format(self, client: AsyncClient, portfolio, body):
        response = await client.post(f"/api/v1/portfolios/{portfolio['id']}/export", json=body)

        assert response.status_code == 400
        assert response.json()['message'] == 'Invalid format'

    async def test_missing_body_is_invalid_format(self, client: AsyncClient, portfolio):
        response = await client.post(f"/api/v1/portfolios/{portfolio['id']}/export")

        assert response.status_code == 400

    async def test_unknown_portfolio_checked_before_format(self, client: AsyncClient):
        response = await client.post('/api/v1/portfolios/nope/export', json={'format': 'docx'})

        assert response.status_code == 404
