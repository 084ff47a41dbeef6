from unittest.mock import Mock, patch
from choukwa.utils.decorators import OFFICIALS, roles_required


def test_roles_required_without_token(client):
    response = client.get("/api/admin/registrations")
    assert response.status_code == 401


def test_roles_required_logic(app):
    """Test the decorator logic with mocked JWT"""
    with app.test_request_context("/api/official/complaints"):
        with patch("choukwa.utils.decorators.get_jwt", Mock(return_value={"role": "mp"})):
            mock_fn = Mock(return_value="success")
            decorated = roles_required(OFFICIALS)(mock_fn)
            assert decorated() == "success"
            mock_fn.assert_called_once()

        with patch("choukwa.utils.decorators.get_jwt", Mock(return_value={"role": "citizen"})):
            mock_fn = Mock(return_value="success")
            response, status = roles_required(OFFICIALS, "admin")(mock_fn)()
            assert status == 403
            assert response.json["message"] == "Accès refusé pour ce rôle."
            mock_fn.assert_not_called()

        with patch("choukwa.utils.decorators.get_jwt", Mock(return_value={})):
            mock_fn = Mock(return_value="success")
            result = roles_required("admin")(mock_fn)()
            assert result[1] == 403
            mock_fn.assert_not_called()


def test_role_enforced_on_routes(client, world):
    response = client.get("/api/admin/registrations", headers=world.mp_headers)
    assert response.status_code == 403
    response = client.get("/api/citizen/complaints", headers=world.admin_headers)
    assert response.status_code == 403
    response = client.post(
        "/api/official/complaints/any-id/forward-ministry", headers=world.deputy_headers
    )
    assert response.status_code == 403
