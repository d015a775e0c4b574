"""Validates generated files for syntax and structural correctness."""

from pathlib import PurePosixPath


def validate_python(files: dict[str, str]) -> dict[str, str]:
    """Check Python files for syntax errors.

    Returns dict of {filename: error_message} for files with errors.
    """
    errors = {}
    for filename, content in files.items():
        if not filename.endswith(".py"):
            continue
        if not content.strip():
            continue
        try:
            compile(content, filename, "exec", dont_inherit=True)
        except SyntaxError as e:
            errors[filename] = f"SyntaxError: {e.msg} (line {e.lineno})"
    return errors


def validate_module_names(files: dict[str, str]) -> dict[str, str]:
    """Check that every generated module can be imported by name."""
    errors = {}
    for filename in files:
        path = PurePosixPath(filename)
        if path.suffix != ".py":
            continue
        if not path.stem.isidentifier():
            errors[filename] = f"'{path.stem}' is not a valid module name"
    return errors


def validate_files(files: dict[str, str]) -> dict[str, str]:
    """Run all validations on generated files.

    Returns dict of {filename: error_message} for all files with errors.
    """
    errors = {}
    errors.update(validate_module_names(files))
    errors.update(validate_python(files))
    return errors
