"""Shared CLI parameter definitions.

Every command connects to a bucket the same way, so the connection options
are declared once here as annotated types and reused in each command
signature. Options left unset fall back to the SS_AWS_* environment.
"""

from enum import Enum
from typing import Annotated, Optional

import typer

BucketOption = Annotated[
    Optional[str],
    typer.Option("--bucket", "-b", help="S3 bucket (default: $SS_AWS_S3_BUCKET)"),
]
AccessKeyOption = Annotated[
    Optional[str], typer.Option("--access-key-id", help="AWS access key ID")
]
SecretKeyOption = Annotated[
    Optional[str], typer.Option("--secret-access-key", help="AWS secret access key")
]
SessionTokenOption = Annotated[
    Optional[str], typer.Option("--session-token", help="AWS session token")
]
RegionOption = Annotated[
    Optional[str],
    typer.Option("--region", help="AWS region name (default: $SS_AWS_REGION)"),
]
EndpointUrlOption = Annotated[
    Optional[str], typer.Option("--endpoint-url", help="Custom S3 endpoint URL")
]
ProfileOption = Annotated[
    Optional[str], typer.Option("--aws-profile", help="AWS CLI profile name")
]
KmsKeyOption = Annotated[
    Optional[str],
    typer.Option("--kms-key-id", help="KMS key ID for server-side encryption"),
]


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


LogLevelOption = Annotated[
    Optional[LogLevel],
    typer.Option(
        "--log-level",
        case_sensitive=False,
        help="Log level for this run (default: $BUCKET_TOOLS_LOG_LEVEL)",
    ),
]
YesOption = Annotated[
    bool, typer.Option("--yes", "-y", help="Do not ask before emptying the bucket")
]
