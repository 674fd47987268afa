"""
Complete Pipeline: Schema file -> Structural Model -> Python module.

Steps:
1. Parse the schema document
2. Build (and validate) the structural model
3. Render and write the module
4. Run the external formatter

Nothing is written unless steps 1-2 succeed. A formatter failure leaves
the unformatted module on disk; rerunning overwrites it.
"""

import logging
from typing import Optional, Sequence

from blockgen.backends.python_generator import (
    DEFAULT_FORMAT_COMMAND,
    format_python_file,
    generate_python,
)
from blockgen.builder import build_structural_model
from blockgen.config import GeneratorConfig
from blockgen.schema_parser import parse_schema_file
from blockgen.structure import StructuralModel


def generate_block_code(input_path: str, output_path: str,
                        logger: Optional[logging.Logger] = None,
                        run_formatter: bool = True,
                        format_command: Sequence[str] = DEFAULT_FORMAT_COMMAND) -> StructuralModel:
    """
    Generate the block module for a schema file.

    Args:
        input_path: Schema document (.json, .yaml, .yml)
        output_path: Module file to write
        logger: Progress logger (defaults to this module's logger)
        run_formatter: Run format_command over the output afterwards
        format_command: External formatter command

    Returns:
        The StructuralModel that was rendered

    Raises:
        FileNotFoundError, SchemaParseError: Schema cannot be read
        SchemaValidationError: Schema cannot be generated
        FormattingError: The formatter failed
    """
    log = logger or logging.getLogger(__name__)
    log.info("Writing block types to %s using schema %s", output_path, input_path)

    log.info("Parsing schema")
    schema = parse_schema_file(input_path)
    log.info("Parsing successful: %d blocks", len(schema.blocks))

    log.info("Generating code")
    model = build_structural_model(schema, logger=log)
    source = generate_python(model)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(source)
    log.info("Successfully wrote code to %s", output_path)

    if run_formatter:
        log.info("Formatting code with %s", " ".join(format_command))
        format_python_file(output_path, command=format_command)

    log.info("Success")
    return model


def run_config(config: GeneratorConfig,
               logger: Optional[logging.Logger] = None) -> StructuralModel:
    """generate_block_code driven by a GeneratorConfig."""
    if not config.input or not config.output:
        raise ValueError("Both input and output must be configured")
    return generate_block_code(
        config.input,
        config.output,
        logger=logger,
        run_formatter=config.run_formatter,
        format_command=config.format_command,
    )
