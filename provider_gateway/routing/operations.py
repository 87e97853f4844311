"""The fixed operation table."""

from provider_gateway.catalog import auth_templates as auth
from provider_gateway.catalog import provider_templates as provider
from provider_gateway.catalog.standard import BACKEND_ERROR, EMPTY_OBJECT
from provider_gateway.models.operation import OperationDescriptor


def _dynamodb(
    name: str, method: str, path: str, action: str, request: str, response: str
) -> OperationDescriptor:
    # Provider operations sit behind the user pool authorizer
    return OperationDescriptor(
        name=name,
        method=method,
        path=path,
        service="dynamodb",
        action=action,
        request_template=request,
        response_template=response,
        error_template=BACKEND_ERROR,
        requires_auth=True,
    )


def _cognito(
    name: str, path: str, action: str, request: str, response: str
) -> OperationDescriptor:
    return OperationDescriptor(
        name=name,
        method="POST",
        path=path,
        service="cognito-idp",
        action=action,
        request_template=request,
        response_template=response,
        error_template=BACKEND_ERROR,
    )


OPERATIONS: tuple[OperationDescriptor, ...] = (
    _dynamodb(
        "ListProviders",
        "GET",
        "/provider",
        "Scan",
        provider.LIST_PROVIDERS_REQUEST,
        provider.LIST_PROVIDERS_RESPONSE,
    ),
    _dynamodb(
        "CreateProvider",
        "POST",
        "/provider",
        "PutItem",
        provider.CREATE_PROVIDER_REQUEST,
        EMPTY_OBJECT,
    ),
    _dynamodb(
        "FetchProvider",
        "GET",
        "/provider/{id}",
        "GetItem",
        provider.PROVIDER_KEY_REQUEST,
        provider.FETCH_PROVIDER_RESPONSE,
    ),
    _dynamodb(
        "UpdateProvider",
        "PUT",
        "/provider/{id}",
        "PutItem",
        provider.UPDATE_PROVIDER_REQUEST,
        EMPTY_OBJECT,
    ),
    _dynamodb(
        "DeleteProvider",
        "DELETE",
        "/provider/{id}",
        "DeleteItem",
        provider.PROVIDER_KEY_REQUEST,
        EMPTY_OBJECT,
    ),
    _cognito(
        "SignupUser",
        "/auth/signup",
        "AdminCreateUser",
        auth.SIGNUP_USER_REQUEST,
        EMPTY_OBJECT,
    ),
    _cognito(
        "SetPassword",
        "/auth/set-password",
        "RespondToAuthChallenge",
        auth.SET_PASSWORD_REQUEST,
        auth.TOKEN_RESPONSE,
    ),
    _cognito(
        "Login",
        "/auth/login",
        "InitiateAuth",
        auth.LOGIN_REQUEST,
        auth.LOGIN_RESPONSE,
    ),
    _cognito(
        "RefreshAccessToken",
        "/auth/refresh-access-token",
        "InitiateAuth",
        auth.REFRESH_ACCESS_TOKEN_REQUEST,
        auth.REFRESH_ACCESS_TOKEN_RESPONSE,
    ),
    _cognito(
        "FetchUser",
        "/auth/user",
        "GetUser",
        auth.FETCH_USER_REQUEST,
        auth.FETCH_USER_RESPONSE,
    ),
    _cognito(
        "ChangePassword",
        "/auth/change-password",
        "ChangePassword",
        auth.CHANGE_PASSWORD_REQUEST,
        EMPTY_OBJECT,
    ),
)
