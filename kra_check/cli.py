#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CLI para validar respuestas grabadas del servicio PAN Validation

Ejemplos:
  # Validar una respuesta contra el fixture de smoke TC_INQ_REQ_002
  kra-check validate resp_002.xml --test-id TC_INQ_REQ_002 --status 200 --elapsed-ms 850

  # Regression, con el caso en un JSON de variables (input_pan_no, expected_http_status, ...)
  kra-check validate resp.xml --case-json caso.json --status 200 \\
      --content-type "text/xml; charset=utf-8" --profile regression

  # Extraer password de una respuesta GetPassword y guardarlo en el environment
  kra-check password get_password.xml --status 200 --env-file .kra_env.json
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .config import KraCheckConfig, get_config
from .environment import Environment
from .exceptions import ConfigError, PasswordUnavailableError
from .password import extract_password
from .run_logger import setup_run_logger
from .test_cases import TestCase, smoke_test_cases
from .validator import ResponseMeta, ResponseValidator, ValidationProfile

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_PASSWORD_UNAVAILABLE = 2


def _load_test_case(args: argparse.Namespace) -> TestCase:
    if args.case_json:
        variables = json.loads(Path(args.case_json).read_text(encoding="utf-8"))
        if not isinstance(variables, dict):
            raise ValueError(f"{args.case_json}: se esperaba un objeto JSON de variables")
        return TestCase.from_variables(variables, test_id=args.test_id)

    cases = smoke_test_cases()
    if args.test_id not in cases:
        raise ValueError(
            f"Caso desconocido: {args.test_id}. Disponibles: {', '.join(sorted(cases))}"
        )
    return cases[args.test_id]


def cmd_validate(args: argparse.Namespace, config: KraCheckConfig) -> int:
    run_logger = setup_run_logger(config, stream=sys.stderr)
    test_case = _load_test_case(args)
    body = Path(args.body_file).read_text(encoding="utf-8")

    run_logger.log_test_start(test_case)
    validator = ResponseValidator(ValidationProfile.named(args.profile, config), run_logger=run_logger)
    meta = ResponseMeta(
        status_code=args.status,
        content_type=args.content_type,
        elapsed_ms=args.elapsed_ms,
    )
    result = validator.validate(body, meta, test_case, request_name=args.request_name)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        for check in result.checks:
            mark = "PASS" if check.passed else "FAIL"
            line = f"[{mark}] {check.name}"
            if check.message:
                line += f" - {check.message}"
            print(line)

    return EXIT_OK if result.passed else EXIT_FAILED


def cmd_password(args: argparse.Namespace, config: KraCheckConfig) -> int:
    run_logger = setup_run_logger(config, stream=sys.stderr)
    env_path = Path(args.env_file)
    environment = Environment.load(env_path)
    body = Path(args.body_file).read_text(encoding="utf-8")

    try:
        outcome = extract_password(body, args.status, environment)
    except PasswordUnavailableError as e:
        run_logger.error("Password retrieval failed", error=str(e), status_code=e.status_code)
        return EXIT_PASSWORD_UNAVAILABLE

    environment.save(env_path)
    run_logger.info("Password available", source=outcome.source, env_file=str(env_path))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kra-check",
        description="Valida respuestas SOAP del servicio PAN Validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Valida una respuesta grabada")
    validate.add_argument("body_file", help="Archivo con el cuerpo de la respuesta")
    source = validate.add_mutually_exclusive_group(required=True)
    source.add_argument("--test-id", help="Fixture de smoke (ej. TC_INQ_REQ_002)")
    source.add_argument("--case-json", help="JSON con variables del caso (input_*, expected_*)")
    validate.add_argument("--status", type=int, required=True, help="HTTP status recibido")
    validate.add_argument("--content-type", default=None, help="Header Content-Type recibido")
    validate.add_argument("--elapsed-ms", type=int, default=0, help="Tiempo de respuesta en ms (default: 0)")
    validate.add_argument(
        "--profile",
        choices=[KraCheckConfig.PROFILE_SMOKE, KraCheckConfig.PROFILE_REGRESSION],
        default=KraCheckConfig.PROFILE_SMOKE,
        help="Perfil de validación (default: smoke)",
    )
    validate.add_argument("--request-name", default=None, help="Nombre del request (para el resumen)")
    validate.add_argument("--json", action="store_true", help="Salida en JSON")
    validate.set_defaults(func=cmd_validate)

    password = subparsers.add_parser("password", help="Extrae el password de una respuesta GetPassword")
    password.add_argument("body_file", help="Archivo con el cuerpo de la respuesta")
    password.add_argument("--status", type=int, required=True, help="HTTP status recibido")
    password.add_argument(
        "--env-file",
        default=".kra_env.json",
        help="Environment persistido en JSON (default: .kra_env.json)",
    )
    password.set_defaults(func=cmd_password)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config()
        return args.func(args, config)
    except (ConfigError, ValueError, OSError) as e:
        print(f"❌ ERROR: {type(e).__name__}: {e}", file=sys.stderr)
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
