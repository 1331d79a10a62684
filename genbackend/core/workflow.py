from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from genbackend.schemas.backend import BackendModel

class GenerationStage(str, Enum):
    CHECK_INPUT = "CHECK_INPUT"
    TRANSLATE = "TRANSLATE"
    VALIDATE = "VALIDATE"
    INSTALL = "INSTALL"
    DONE = "DONE"
    FAILED = "FAILED"

class ErrorKind(str, Enum):
    INPUT = "INPUT"
    UPSTREAM = "UPSTREAM"
    DECODE = "DECODE"
    VALIDATION = "VALIDATION"

class ErrorCode(str, Enum):
    EMPTY_PROMPT = "EmptyPrompt"
    MISSING_CREDENTIAL = "MissingCredential"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    MALFORMED_RESPONSE = "MalformedResponse"
    INVALID_SHAPE = "InvalidShape"
    DANGLING_NODE_REFERENCE = "DanglingNodeReference"
    INVALID_ENDPOINT = "InvalidEndpoint"
    DUPLICATE_NAME = "DuplicateName"
    INVALID_MODEL = "InvalidModel"

ERROR_KINDS = {
    ErrorCode.EMPTY_PROMPT: ErrorKind.INPUT,
    ErrorCode.MISSING_CREDENTIAL: ErrorKind.INPUT,
    ErrorCode.SERVICE_UNAVAILABLE: ErrorKind.UPSTREAM,
    ErrorCode.MALFORMED_RESPONSE: ErrorKind.DECODE,
    ErrorCode.INVALID_SHAPE: ErrorKind.DECODE,
    ErrorCode.DANGLING_NODE_REFERENCE: ErrorKind.VALIDATION,
    ErrorCode.INVALID_ENDPOINT: ErrorKind.VALIDATION,
    ErrorCode.DUPLICATE_NAME: ErrorKind.VALIDATION,
    ErrorCode.INVALID_MODEL: ErrorKind.VALIDATION,
}

@dataclass(frozen=True)
class GenerationError:
    code: ErrorCode
    message: str
    stage: GenerationStage

    @property
    def kind(self) -> ErrorKind:
        return ERROR_KINDS[self.code]

    @property
    def is_input_error(self) -> bool:
        return self.kind == ErrorKind.INPUT

@dataclass(frozen=True)
class TranslationResult:
    ok: bool
    message: str
    raw: Optional[Dict[str, Any]] = None
    error: Optional[GenerationError] = None

@dataclass(frozen=True)
class GenerationResult:
    ok: bool
    message: str
    model: Optional["BackendModel"] = None
    error: Optional[GenerationError] = None
    # Assembler stage the generation stopped at; the error keeps its own origin stage.
    failed_stage: Optional[GenerationStage] = None
