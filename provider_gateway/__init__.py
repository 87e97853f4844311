"""Provider Gateway: declarative REST mapping layer over DynamoDB and Cognito."""

__version__ = "1.0.0"
