from pathlib import Path
from typing import Union

from registry_validator.config import DEFAULT_CHAINS
from registry_validator.models import (
    TOKEN_TYPES,
    ChainTable,
    DistributionRecord,
    Issue,
    IssueKind,
)
from registry_validator.utils import (
    display,
    is_address,
    is_bytes32,
    is_non_negative_number,
    is_number,
    read_json,
)

REQUIRED_FIELDS = [
    "chainId",
    "chainName",
    "name",
    "description",
    "token",
    "distributor",
    "registry",
    "merkleRoot",
    "createdAt",
    "totalRecipients",
    "totalAmount",
    "createdBy",
]

TOKEN_REQUIRED_FIELDS = ["address", "name", "symbol", "decimals", "type"]

ADDRESS_FIELDS = ["distributor", "registry", "createdBy"]


def load_distribution(path: Union[str, Path]) -> DistributionRecord:
    """
    Read and decode a distribution.json file.
    Raises `OSError` if the file can't be read and `ValueError` if it isn't a JSON object.
    """
    data = read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {display(data)}")
    return DistributionRecord.model_validate(data)


def check_required_fields(record: DistributionRecord) -> list[Issue]:
    return [
        Issue(
            kind=IssueKind.SCHEMA,
            field=field,
            message=f"Missing required field: {field}",
        )
        for field in REQUIRED_FIELDS
        if not record.has(field)
    ]


def check_chain(record: DistributionRecord, chains: ChainTable) -> list[Issue]:
    """chainName must be in the table, and chainId must be the id the table gives it"""
    if not record.present("chainName"):
        return []

    chain_name = record.chainName
    if chain_name not in chains:
        return [
            Issue(
                kind=IssueKind.FORMAT,
                field="chainName",
                message=f"Unsupported chain: {display(chain_name)}",
            )
        ]

    expected = chains.chain_id(chain_name)  # type: ignore
    chain_id = record.chainId
    if record.present("chainId") and (not is_number(chain_id) or chain_id != expected):
        return [
            Issue(
                kind=IssueKind.CONSISTENCY,
                field="chainId",
                message=f"Chain ID mismatch: {display(chain_id)} vs expected {expected}",
            )
        ]
    return []


def check_addresses(record: DistributionRecord) -> list[Issue]:
    fields = [(field, getattr(record, field)) for field in ADDRESS_FIELDS]
    token = record.token_record
    if token is not None:
        fields.append(("token.address", token.address))

    # absent values are already reported as missing fields
    return [
        Issue(
            kind=IssueKind.FORMAT,
            field=field,
            message=f"Invalid address in {field}: {display(value)}",
        )
        for field, value in fields
        if value is not None and not is_address(value)
    ]


def check_token(record: DistributionRecord) -> list[Issue]:
    if not record.present("token"):
        return []

    token = record.token_record
    if token is None:
        return [
            Issue(
                kind=IssueKind.FORMAT,
                field="token",
                message=f"Invalid token: expected an object, got: {display(record.token)}",
            )
        ]

    issues = [
        Issue(
            kind=IssueKind.SCHEMA,
            field=f"token.{field}",
            message=f"Missing required token field: {field}",
        )
        for field in TOKEN_REQUIRED_FIELDS
        if not token.has(field)
    ]

    if token.present("type") and not (
        isinstance(token.type, str) and token.type in TOKEN_TYPES
    ):
        issues.append(
            Issue(
                kind=IssueKind.FORMAT,
                field="token.type",
                message=f"Invalid token type: {display(token.type)}",
            )
        )
    return issues


def check_merkle_root(record: DistributionRecord) -> list[Issue]:
    if record.present("merkleRoot") and not is_bytes32(record.merkleRoot):
        return [
            Issue(
                kind=IssueKind.FORMAT,
                field="merkleRoot",
                message=f"Invalid merkleRoot format: {display(record.merkleRoot)}",
            )
        ]
    return []


def check_total_recipients(record: DistributionRecord) -> list[Issue]:
    if record.present("totalRecipients") and not is_non_negative_number(
        record.totalRecipients
    ):
        return [
            Issue(
                kind=IssueKind.FORMAT,
                field="totalRecipients",
                message=f"Invalid totalRecipients: {display(record.totalRecipients)}",
            )
        ]
    return []


def validate_distribution(
    record: DistributionRecord, chains: ChainTable = DEFAULT_CHAINS
) -> tuple[Issue, ...]:
    """
    Run every check against a decoded distribution record.
    Checks don't short circuit, so the result lists every problem in the file.
    """
    return (
        *check_required_fields(record),
        *check_chain(record, chains),
        *check_addresses(record),
        *check_token(record),
        *check_merkle_root(record),
        *check_total_recipients(record),
    )


def validate_distribution_file(
    path: Union[str, Path], chains: ChainTable = DEFAULT_CHAINS
) -> tuple[Issue, ...]:
    """
    Validate a distribution.json file.
    An unreadable or malformed file is reported as a single issue rather than raised.
    """
    try:
        record = load_distribution(path)
    except (OSError, ValueError) as e:
        return (Issue(kind=IssueKind.PARSE, message=f"Failed to parse JSON: {e}"),)
    return validate_distribution(record, chains)
