"""Project-wide error union referenced by repositories, use cases and state."""

CORE_ERROR = """import 'package:freezed_annotation/freezed_annotation.dart';

part 'error.freezed.dart';

@freezed
class Error with _$Error {
  const factory Error.httpInternalServerError(String errorBody) =
      HttpInternalServerError;

  const factory Error.httpUnAuthorizedError() = HttpUnAuthorizedError;

  const factory Error.httpUnknownError(String message) = HttpUnknownError;

  const factory Error.customErrorType(String message) = CustomErrorType;

  const factory Error.fileNotFoundError(String filePath) = FileNotFoundError;

  const factory Error.none() = NoError;
}
"""


def render_core_error() -> str:
    return CORE_ERROR
