#!/usr/bin/env python3
"""Command-line and worker entry points for validating Web Identity documents."""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .constants import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    JWE_STRING_REGEX,
    JWT_STRING_REGEX,
    JWS_STRING_REGEX,
    LOG_LEVEL_ENV_VAR,
    STDIN,
)
from .did import (
    Did,
    DidDocument,
    DidUrl,
    Service,
    VerificationMethod,
    did_method_of,
    is_did,
    is_did_with_method,
)
from .errors import InvalidInputError, UnknownSchemaError, WebIdentitySchemaError
from .jwe import JweFlattenedJson, JweGeneralJson, JweObject, JweParsed, JweString
from .jwk import JsonWebKey, JsonWebKeySet
from .jws import (
    DetachedJwsString,
    JwsFlattenedJson,
    JwsGeneralJson,
    JwsObject,
    JwsParsed,
    JwsString,
)
from .jwt import JwtDecoded, JwtHeader, JwtObject, JwtParts, JwtPayload, JwtString
from .schemas import DidCheckOutput, ErrorOutput, InputSchema, SchemaListOutput
from .status_list import (
    BitstringStatusListCredential,
    BitstringStatusListEntry,
    StatusList2021Credential,
    StatusList2021Entry,
)
from .validation import validate
from .vc import SignedVerifiableCredential, VcContext, VerifiableCredential, W3CCredential
from .vc_core import CredentialStatus, Proof
from .vc_v1 import CredentialV1, SignedVerifiableCredentialV1, VerifiableCredentialV1
from .vc_v2 import CredentialV2, SignedVerifiableCredentialV2, VerifiableCredentialV2
from .vp import SignedVerifiablePresentation, VerifiablePresentation

logger = logging.getLogger(__name__)

SCHEMA_REGISTRY: Dict[str, Any] = {
    "jwk": JsonWebKey,
    "jwks": JsonWebKeySet,
    "jws": JwsString,
    "jws-compact": JwsParsed,
    "jws-detached": DetachedJwsString,
    "jws-json": JwsGeneralJson,
    "jws-flattened": JwsFlattenedJson,
    "jws-object": JwsObject,
    "jwe": JweString,
    "jwe-compact": JweParsed,
    "jwe-json": JweGeneralJson,
    "jwe-flattened": JweFlattenedJson,
    "jwe-object": JweObject,
    "jwt": JwtDecoded,
    "jwt-string": JwtString,
    "jwt-parts": JwtParts,
    "jwt-object": JwtObject,
    "jwt-header": JwtHeader,
    "jwt-payload": JwtPayload,
    "did": Did,
    "did-url": DidUrl,
    "did-document": DidDocument,
    "verification-method": VerificationMethod,
    "service": Service,
    "vc-context": VcContext,
    "proof": Proof,
    "credential-status": CredentialStatus,
    "credential": W3CCredential,
    "credential-v1": CredentialV1,
    "credential-v2": CredentialV2,
    "verifiable-credential": VerifiableCredential,
    "verifiable-credential-v1": VerifiableCredentialV1,
    "verifiable-credential-v2": VerifiableCredentialV2,
    "signed-verifiable-credential": SignedVerifiableCredential,
    "signed-verifiable-credential-v1": SignedVerifiableCredentialV1,
    "signed-verifiable-credential-v2": SignedVerifiableCredentialV2,
    "verifiable-presentation": VerifiablePresentation,
    "signed-verifiable-presentation": SignedVerifiablePresentation,
    "status-list-2021-credential": StatusList2021Credential,
    "status-list-2021-entry": StatusList2021Entry,
    "bitstring-status-list-credential": BitstringStatusListCredential,
    "bitstring-status-list-entry": BitstringStatusListEntry,
}


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application.

    ``--verbose`` wins; otherwise the level comes from the environment, then INFO.
    """
    if verbose:
        log_level = logging.DEBUG
    else:
        level_name = os.getenv(LOG_LEVEL_ENV_VAR, "INFO").upper()
        log_level = getattr(logging, level_name, None)
        if not isinstance(log_level, int):
            log_level = logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Web Identity document validator")
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', required=True, help='Command to execute')

    validate_parser = subparsers.add_parser('validate', help='Validate a document against a schema')
    validate_parser.add_argument('schema', help='Schema name (see the list command)')
    validate_parser.add_argument('input',
                                 help="JSON file, '-' for stdin, inline JSON, or a compact JWS/JWE/JWT")

    subparsers.add_parser('list', help='List schema names')

    did_parser = subparsers.add_parser('check-did', help='Check DID syntax')
    did_parser.add_argument('did', help='DID to check')
    did_parser.add_argument('--method', help='Require this DID method')

    return parser.parse_args(argv)


def get_schema(name: str) -> Any:
    try:
        return SCHEMA_REGISTRY[name]
    except KeyError:
        raise UnknownSchemaError(name)


def load_json_file(file_path: str) -> Any:
    """Load and parse a JSON file."""
    try:
        with open(file_path, 'r') as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.error(f"Failed to load JSON from {file_path}: {e}")
        raise InvalidInputError(f"Failed to load JSON from {file_path}: {e}")


def _is_compact_jose(text: str) -> bool:
    return any(
        regex.fullmatch(text) is not None
        for regex in (JWS_STRING_REGEX, JWT_STRING_REGEX, JWE_STRING_REGEX)
    )


def parse_text(text: str) -> Any:
    """Interpret raw text as JSON, a compact JOSE string, or a plain string."""
    stripped = text.strip()
    if _is_compact_jose(stripped):
        logger.debug("Detected compact JOSE serialization, using as-is")
        return stripped
    if stripped[:1] in ('{', '[', '"'):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"Input is not valid JSON: {e}")
    return stripped


def load_input(source: str) -> Any:
    """Resolve a CLI input argument: ``-`` for stdin, a file path, or inline text."""
    if source == '-':
        logger.debug("Reading input from stdin")
        return parse_text(STDIN.read())
    if os.path.isfile(source):
        logger.debug(f"Treating input as file path: {source}")
        return load_json_file(source)
    return parse_text(source)


def validate_document(schema_name: str, document: Any) -> Dict[str, Any]:
    """Validate an already loaded document against a registered schema."""
    schema = get_schema(schema_name)
    logger.info(f"Validating input against '{schema_name}'")
    result = validate(schema, document, schema_name=schema_name)
    if result.valid:
        logger.info(f"Input is a valid '{schema_name}'")
    else:
        logger.info(f"Input is not a valid '{schema_name}' ({len(result.issues)} issue(s))")
    return result.model_dump()


def check_did(did: str, method: Optional[str] = None) -> Dict[str, Any]:
    valid = is_did_with_method(method, did) if method else is_did(did)
    output = DidCheckOutput(did=did, valid=valid, method=did_method_of(did) if valid else None)
    return output.model_dump()


def list_schemas() -> Dict[str, Any]:
    return SchemaListOutput(schemas=sorted(SCHEMA_REGISTRY)).model_dump()


def _find_payload(args: tuple, kwargs: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    if 'func_name' in kwargs:
        logger.debug("Found inputs directly in kwargs")
        return kwargs
    module_run = kwargs.get('module_run')
    if isinstance(module_run, dict):
        inputs = module_run.get('inputs')
        if isinstance(inputs, dict) and 'func_name' in inputs:
            logger.debug("Found inputs nested under kwargs['module_run']['inputs']")
            return inputs
        if 'func_name' in module_run:
            logger.debug("Found inputs nested directly under kwargs['module_run']")
            return module_run
    if args and isinstance(args[0], dict) and 'func_name' in args[0]:
        logger.debug("Found inputs as first positional arg (args[0])")
        return args[0]
    return None


def run(*args, **kwargs) -> Dict[str, Any]:
    """
    Process a request passed programmatically or by a worker.

    Args:
        *args: Optionally the input payload as the first positional argument.
        **kwargs: The payload itself, or the payload nested under 'module_run'.

    Returns:
        Dict containing the result of the operation.

    Raises:
        InvalidInputError: If the payload is missing, malformed, or names an unknown schema.
    """
    logger.debug(f"Received args: {args}")
    logger.debug(f"Received kwargs: {kwargs}")

    input_payload = _find_payload(args, kwargs)
    if input_payload is None:
        raise InvalidInputError("Missing 'func_name' parameter in args or kwargs")

    try:
        request = InputSchema(**input_payload)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid input payload: {e.errors(include_url=False)[0]['msg']}")

    params = request.func_input_data
    logger.info(f"Executing function: {request.func_name}")

    if request.func_name == 'validate':
        schema_name = params.get('schema')
        if not schema_name:
            raise InvalidInputError("Missing 'schema' in func_input_data for validate")
        if 'document' in params:
            document = params['document']
        elif 'input' in params:
            document = load_input(params['input'])
        else:
            raise InvalidInputError("Missing 'document' or 'input' in func_input_data for validate")
        return validate_document(schema_name, document)

    elif request.func_name in ('list', 'list-schemas'):
        return list_schemas()

    else:
        did = params.get('did')
        if not did:
            raise InvalidInputError("Missing 'did' in func_input_data for check-did")
        return check_did(did, params.get('method'))


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    try:
        args = parse_args(argv)
        setup_logging(args.verbose)

        if args.command == 'validate':
            result = validate_document(args.schema, load_input(args.input))
            exit_code = EXIT_SUCCESS if result["valid"] else EXIT_FAILURE

        elif args.command == 'list':
            result = list_schemas()
            exit_code = EXIT_SUCCESS

        elif args.command == 'check-did':
            result = check_did(args.did, args.method)
            exit_code = EXIT_SUCCESS if result["valid"] else EXIT_FAILURE

        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return EXIT_FAILURE

        print(json.dumps(result, indent=2))
        return exit_code

    except WebIdentitySchemaError as e:
        print(json.dumps(ErrorOutput(error=e.error_code, message=e.message).model_dump(), indent=2))
        return EXIT_FAILURE
    except Exception as e:
        print(json.dumps(ErrorOutput(error="UnexpectedError", message=str(e)).model_dump(), indent=2))
        logger.exception("Unexpected error occurred")
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
