"""Errores del import de modelos.

Cada error lleva un `error_code` estable, detalles opcionales y, cuando hay
algo útil que decirle al usuario, listas de causa probable y remediación
sugerida. La CLI es la única capa que los presenta.
"""

from __future__ import annotations

from typing import Any, Sequence


class ModelCtlError(Exception):
    """Base de todos los errores que terminan el comando."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
        *,
        probable_cause: Sequence[str] | None = None,
        suggested_remediation: Sequence[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.probable_cause = list(probable_cause or [])
        self.suggested_remediation = list(suggested_remediation or [])


class UsageError(ModelCtlError):
    """Argumentos ausentes o sobrantes."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "USAGE_ERROR")


class FileReadError(ModelCtlError):
    def __init__(self, path: str, cause: Exception | None = None) -> None:
        details: dict[str, Any] = {"path": path}
        if cause is not None:
            details["cause"] = str(cause)
        super().__init__(
            f"Unable to read file '{path}'",
            "FILE_READ_ERROR",
            details,
            probable_cause=["The file does not exist or is not readable by the current user"],
            suggested_remediation=["Verify the path and its permissions"],
        )
        self.path = path


class FolderStatError(ModelCtlError):
    def __init__(self, path: str, cause: Exception | None = None) -> None:
        details: dict[str, Any] = {"path": path}
        if cause is not None:
            details["cause"] = str(cause)
        super().__init__(
            f"Unable to access '{path}'",
            "FOLDER_STAT_ERROR",
            details,
            probable_cause=["The path does not exist"],
            suggested_remediation=["Provide an existing file, directory or a valid URL"],
        )
        self.path = path


class CsvLocationError(ModelCtlError):
    """No se pudo resolver el trío model/component/relationship CSV."""

    def __init__(
        self,
        message: str,
        directory: str,
        *,
        probable_cause: Sequence[str] | None = None,
        suggested_remediation: Sequence[str] | None = None,
    ) -> None:
        super().__init__(
            message,
            "CSV_LOCATION_ERROR",
            {"directory": directory},
            probable_cause=probable_cause,
            suggested_remediation=suggested_remediation,
        )
        self.directory = directory


class RequestError(ModelCtlError):
    """La petición al registry falló (transporte o status != 200)."""

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        status_code: int | None = None,
    ) -> None:
        details: dict[str, Any] = {"method": method, "url": url}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            message,
            "REQUEST_ERROR",
            details,
            probable_cause=["The registry server is unreachable or rejected the request"],
            suggested_remediation=[
                "Check that the server is running and that MODELCTL_SERVER_URL points to it",
            ],
        )
        self.method = method
        self.url = url
        self.status_code = status_code


class DecodeError(ModelCtlError):
    """Respuesta (o payload) que no se puede decodificar."""

    def __init__(
        self,
        message: str,
        subject: str = "response body",
        error_code: str = "DECODE_ERROR",
        cause: str | None = None,
    ) -> None:
        details: dict[str, Any] = {"subject": subject}
        if cause:
            details["cause"] = cause
        super().__init__(message, error_code, details)
        self.subject = subject


class PayloadDecodeError(DecodeError):
    """Los bytes de un modelo pre-parseado no son JSON válido."""

    def __init__(self, message: str) -> None:
        super().__init__(message, subject="model", error_code="PAYLOAD_DECODE_ERROR")


class NoModelRegisteredError(ModelCtlError):
    """Respuesta bien formada pero sin ningún modelo registrado."""

    def __init__(self, model_names: str = "") -> None:
        details: dict[str, Any] = {}
        if model_names:
            details["models"] = model_names
        super().__init__(
            "Invalid model: no model was registered",
            "INVALID_MODEL",
            details,
            probable_cause=["The artifact does not contain a valid model definition"],
            suggested_remediation=[
                "Ensure that you are importing an existing model or a well formed model definition",
            ],
        )


class SkipEntry(Exception):
    """Señal local: una entrada de la respuesta no tiene la forma esperada.

    No es un `ModelCtlError`: nunca sale del clasificador.
    """

    def __init__(self, field: str, expected: str, value: object) -> None:
        super().__init__(
            f"{field}: expected {expected}, got {type(value).__name__} ({value!r})"
        )
        self.field = field
        self.expected = expected
        self.value = value
