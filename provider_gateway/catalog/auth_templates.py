"""Templates for the Cognito user pool operations."""

from provider_gateway.catalog.builders import Nodes, array, literal, member, obj, string
from provider_gateway.mapping.nodes import (
    Equals,
    ForEach,
    If,
    Ref,
    Rewrite,
    Template,
    Text,
)

NEW_PASSWORD_REQUIRED = "NEW_PASSWORD_REQUIRED"

SIGNUP_USER_REQUEST = "SignupUserRequest"
SET_PASSWORD_REQUEST = "SetPasswordRequest"
TOKEN_RESPONSE = "TokenResponse"
LOGIN_REQUEST = "LoginRequest"
LOGIN_RESPONSE = "LoginResponse"
REFRESH_ACCESS_TOKEN_REQUEST = "RefreshAccessTokenRequest"
REFRESH_ACCESS_TOKEN_RESPONSE = "RefreshAccessTokenResponse"
FETCH_USER_REQUEST = "FetchUserRequest"
FETCH_USER_RESPONSE = "FetchUserResponse"
CHANGE_PASSWORD_REQUEST = "ChangePasswordRequest"


def _tokens(*names: tuple[str, str]) -> Nodes:
    return member(
        "token",
        obj(
            *(
                member(key, string(Ref(f"body.AuthenticationResult.{result_key}")))
                for key, result_key in names
            )
        ),
    )


def signup_user_request(user_pool_id: str) -> Template:
    return Template(
        SIGNUP_USER_REQUEST,
        obj(
            member("UserPoolId", literal(user_pool_id)),
            member("Username", string(Ref("body.email"))),
            member("DesiredDeliveryMediums", literal(["EMAIL"])),
            member("ForceAliasCreation", literal(True)),
            member(
                "UserAttributes",
                array(
                    obj(
                        member("Name", literal("email")),
                        member("Value", string(Ref("body.email"))),
                    ),
                    obj(
                        member("Name", literal("email_verified")),
                        member("Value", literal("true")),
                    ),
                ),
            ),
        ),
    )


def set_password_request(user_pool_client_id: str) -> Template:
    return Template(
        SET_PASSWORD_REQUEST,
        obj(
            member("ClientId", literal(user_pool_client_id)),
            member("ChallengeName", literal(NEW_PASSWORD_REQUIRED)),
            member("Session", string(Ref("body.session"))),
            member(
                "ChallengeResponses",
                obj(
                    member("USERNAME", string(Ref("body.email"))),
                    member("NEW_PASSWORD", string(Ref("body.newPassword"))),
                ),
            ),
        ),
    )


def token_response() -> Template:
    """Access, id and refresh tokens from an ``AuthenticationResult``."""
    return Template(
        TOKEN_RESPONSE,
        (
            Text("{"),
            *_tokens(
                ("access", "AccessToken"),
                ("id", "IdToken"),
                ("refresh", "RefreshToken"),
            ),
            Text("}"),
        ),
    )


def login_request(user_pool_client_id: str) -> Template:
    return Template(
        LOGIN_REQUEST,
        obj(
            member("ClientId", literal(user_pool_client_id)),
            member("AuthFlow", literal("USER_PASSWORD_AUTH")),
            member(
                "AuthParameters",
                obj(
                    member("USERNAME", string(Ref("body.email"))),
                    member("PASSWORD", string(Ref("body.password"))),
                ),
            ),
        ),
    )


def login_response() -> Template:
    """
    Either a ``challenge`` or a ``token`` object, never both.

    The branch depends only on ``ChallengeName``: a result carrying tokens
    and the challenge marker still yields the challenge.
    """
    challenge = member(
        "challenge",
        obj(
            member("name", string(Ref("body.ChallengeName"))),
            member("session", string(Ref("body.Session"))),
        ),
    )
    token = _tokens(
        ("access", "AccessToken"),
        ("id", "IdToken"),
        ("refresh", "RefreshToken"),
    )
    return Template(
        LOGIN_RESPONSE,
        (
            Text("{"),
            If(
                Equals("body.ChallengeName", NEW_PASSWORD_REQUIRED),
                then=challenge,
                otherwise=token,
            ),
            Text("}"),
        ),
    )


def refresh_access_token_request(user_pool_client_id: str) -> Template:
    return Template(
        REFRESH_ACCESS_TOKEN_REQUEST,
        obj(
            member("ClientId", literal(user_pool_client_id)),
            member("AuthFlow", literal("REFRESH_TOKEN_AUTH")),
            member(
                "AuthParameters",
                obj(member("REFRESH_TOKEN", string(Ref("body.refreshToken")))),
            ),
        ),
    )


def refresh_access_token_response() -> Template:
    # Cognito does not rotate the refresh token on REFRESH_TOKEN_AUTH
    return Template(
        REFRESH_ACCESS_TOKEN_RESPONSE,
        (
            Text("{"),
            *_tokens(("access", "AccessToken"), ("id", "IdToken")),
            Text("}"),
        ),
    )


def fetch_user_request() -> Template:
    return Template(
        FETCH_USER_REQUEST,
        obj(member("AccessToken", string(Ref("body.accessToken")))),
    )


def fetch_user_response() -> Template:
    """
    Flatten ``UserAttributes`` into one object.

    ``sub`` becomes ``username``, ``email_verified`` becomes
    ``emailVerified`` with a boolean value, and custom attributes lose
    their ``custom:`` prefix. Every other value stays a string.
    """
    email_verified = (
        *string(Rewrite("attribute.Name", (("_verified", "Verified"),))),
        Text(":"),
        If(
            Equals("attribute.Value", "true"),
            then=(Text("true"),),
            otherwise=(Text("false"),),
        ),
    )
    username = member("username", string(Ref("attribute.Value")))
    other = (
        *string(Rewrite("attribute.Name", (("custom:", ""),))),
        Text(":"),
        *string(Ref("attribute.Value")),
    )
    return Template(
        FETCH_USER_RESPONSE,
        (
            Text("{"),
            ForEach(
                source="body.UserAttributes",
                var="attribute",
                body=(
                    If(
                        Equals("attribute.Name", "email_verified"),
                        then=email_verified,
                        otherwise=(
                            If(
                                Equals("attribute.Name", "sub"),
                                then=username,
                                otherwise=other,
                            ),
                        ),
                    ),
                ),
            ),
            Text("}"),
        ),
    )


def change_password_request() -> Template:
    return Template(
        CHANGE_PASSWORD_REQUEST,
        obj(
            member("AccessToken", string(Ref("body.accessToken"))),
            member("PreviousPassword", string(Ref("body.password"))),
            member("ProposedPassword", string(Ref("body.newPassword"))),
        ),
    )
