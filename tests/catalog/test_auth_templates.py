"""Tests for the Cognito templates."""

import itertools

import pytest

from provider_gateway.catalog import Catalog, CatalogConfig
from provider_gateway.catalog import auth_templates as auth
from provider_gateway.mapping import Context, evaluate, evaluate_json


class TestLogin:
    """Login request and the challenge-or-token branch."""

    def test_request(
        self, catalog: Catalog, catalog_config: CatalogConfig
    ) -> None:
        body = {"email": "ann@x.test", "password": "S3cret!"}
        result = evaluate_json(catalog[auth.LOGIN_REQUEST], Context(body=body))
        assert result == {
            "ClientId": catalog_config.user_pool_client_id,
            "AuthFlow": "USER_PASSWORD_AUTH",
            "AuthParameters": {"USERNAME": "ann@x.test", "PASSWORD": "S3cret!"},
        }

    def test_password_path(self, catalog: Catalog) -> None:
        body = {
            "AuthenticationResult": {
                "AccessToken": "A",
                "IdToken": "I",
                "RefreshToken": "R",
            }
        }
        out = evaluate(catalog[auth.LOGIN_RESPONSE], Context(body=body))
        assert out == '{"token":{"access":"A","id":"I","refresh":"R"}}'

    def test_challenge_path(self, catalog: Catalog) -> None:
        body = {"ChallengeName": "NEW_PASSWORD_REQUIRED", "Session": "S"}
        out = evaluate(catalog[auth.LOGIN_RESPONSE], Context(body=body))
        assert out == '{"challenge":{"name":"NEW_PASSWORD_REQUIRED","session":"S"}}'

    def test_challenge_wins_even_with_tokens(self, catalog: Catalog) -> None:
        """Test that the branch keys on the challenge name, not on tokens."""
        body = {
            "ChallengeName": "NEW_PASSWORD_REQUIRED",
            "Session": "S",
            "AuthenticationResult": {"AccessToken": "A"},
        }
        result = evaluate_json(catalog[auth.LOGIN_RESPONSE], Context(body=body))
        assert list(result) == ["challenge"]

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"ChallengeName": "SMS_MFA", "Session": "S"},
            {"ChallengeName": None},
            {"AuthenticationResult": {}},
        ],
    )
    def test_branches_are_exclusive(self, catalog: Catalog, body: dict) -> None:
        """Test that exactly one of challenge/token appears for any input."""
        result = evaluate_json(catalog[auth.LOGIN_RESPONSE], Context(body=body))
        assert list(result) == ["token"]


class TestFetchUser:
    """GetUser attribute projection."""

    ATTRIBUTES = [
        {"Name": "sub", "Value": "u1"},
        {"Name": "email_verified", "Value": "true"},
        {"Name": "custom:role", "Value": "admin"},
    ]

    def test_request(self, catalog: Catalog) -> None:
        result = evaluate_json(
            catalog[auth.FETCH_USER_REQUEST], Context(body={"accessToken": "tok"})
        )
        assert result == {"AccessToken": "tok"}

    def test_projection(self, catalog: Catalog) -> None:
        result = evaluate_json(
            catalog[auth.FETCH_USER_RESPONSE],
            Context(body={"Username": "u1", "UserAttributes": self.ATTRIBUTES}),
        )
        assert result == {"username": "u1", "emailVerified": True, "role": "admin"}

    def test_order_does_not_change_values(self, catalog: Catalog) -> None:
        template = catalog[auth.FETCH_USER_RESPONSE]
        expected = {"username": "u1", "emailVerified": True, "role": "admin"}
        for permutation in itertools.permutations(self.ATTRIBUTES):
            result = evaluate_json(
                template, Context(body={"UserAttributes": list(permutation)})
            )
            assert result == expected

    def test_email_verified_false(self, catalog: Catalog) -> None:
        body = {"UserAttributes": [{"Name": "email_verified", "Value": "false"}]}
        result = evaluate_json(catalog[auth.FETCH_USER_RESPONSE], Context(body=body))
        assert result == {"emailVerified": False}

    def test_unexpected_email_verified_value_is_false(self, catalog: Catalog) -> None:
        body = {"UserAttributes": [{"Name": "email_verified", "Value": "yes"}]}
        result = evaluate_json(catalog[auth.FETCH_USER_RESPONSE], Context(body=body))
        assert result == {"emailVerified": False}

    def test_other_attributes_stay_strings(self, catalog: Catalog) -> None:
        body = {
            "UserAttributes": [
                {"Name": "email", "Value": "ann@x.test"},
                {"Name": "custom:tier", "Value": "true"},
                {"Name": "custom:subscription", "Value": "gold"},
            ]
        }
        result = evaluate_json(catalog[auth.FETCH_USER_RESPONSE], Context(body=body))
        assert result == {"email": "ann@x.test", "tier": "true", "subscription": "gold"}

    def test_no_attributes(self, catalog: Catalog) -> None:
        template = catalog[auth.FETCH_USER_RESPONSE]
        assert evaluate(template, Context(body={"UserAttributes": []})) == "{}"
        assert evaluate(template, Context(body={})) == "{}"


class TestOtherAuthTemplates:
    """Signup, set-password, refresh and change-password."""

    def test_signup_request(
        self, catalog: Catalog, catalog_config: CatalogConfig
    ) -> None:
        result = evaluate_json(
            catalog[auth.SIGNUP_USER_REQUEST], Context(body={"email": "ann@x.test"})
        )
        assert result == {
            "UserPoolId": catalog_config.user_pool_id,
            "Username": "ann@x.test",
            "DesiredDeliveryMediums": ["EMAIL"],
            "ForceAliasCreation": True,
            "UserAttributes": [
                {"Name": "email", "Value": "ann@x.test"},
                {"Name": "email_verified", "Value": "true"},
            ],
        }

    def test_set_password_request(
        self, catalog: Catalog, catalog_config: CatalogConfig
    ) -> None:
        body = {"email": "ann@x.test", "session": "S", "newPassword": "N3w!pass"}
        result = evaluate_json(catalog[auth.SET_PASSWORD_REQUEST], Context(body=body))
        assert result == {
            "ClientId": catalog_config.user_pool_client_id,
            "ChallengeName": "NEW_PASSWORD_REQUIRED",
            "Session": "S",
            "ChallengeResponses": {"USERNAME": "ann@x.test", "NEW_PASSWORD": "N3w!pass"},
        }

    def test_token_response(self, catalog: Catalog) -> None:
        body = {
            "ChallengeParameters": {},
            "AuthenticationResult": {
                "AccessToken": "A",
                "IdToken": "I",
                "RefreshToken": "R",
                "ExpiresIn": 3600,
            },
        }
        result = evaluate_json(catalog[auth.TOKEN_RESPONSE], Context(body=body))
        assert result == {"token": {"access": "A", "id": "I", "refresh": "R"}}

    def test_refresh_request(
        self, catalog: Catalog, catalog_config: CatalogConfig
    ) -> None:
        result = evaluate_json(
            catalog[auth.REFRESH_ACCESS_TOKEN_REQUEST],
            Context(body={"refreshToken": "R"}),
        )
        assert result == {
            "ClientId": catalog_config.user_pool_client_id,
            "AuthFlow": "REFRESH_TOKEN_AUTH",
            "AuthParameters": {"REFRESH_TOKEN": "R"},
        }

    def test_refresh_response_has_no_refresh_token(self, catalog: Catalog) -> None:
        body = {"AuthenticationResult": {"AccessToken": "A", "IdToken": "I"}}
        result = evaluate_json(
            catalog[auth.REFRESH_ACCESS_TOKEN_RESPONSE], Context(body=body)
        )
        assert result == {"token": {"access": "A", "id": "I"}}

    def test_change_password_request(self, catalog: Catalog) -> None:
        body = {"accessToken": "tok", "password": "old", "newPassword": "new"}
        result = evaluate_json(
            catalog[auth.CHANGE_PASSWORD_REQUEST], Context(body=body)
        )
        assert result == {
            "AccessToken": "tok",
            "PreviousPassword": "old",
            "ProposedPassword": "new",
        }
