"""Scanner `begin` argument assembly."""

import os
import shlex

from sonar_prebuild.utils.validators import (
    DatabaseParams,
    ProjectParams,
    SonarEndpoint,
    is_blank,
    is_file_path_specified,
)


def build_begin_args(
    endpoint: SonarEndpoint,
    project: ProjectParams,
    database: DatabaseParams | None = None,
    additional_args: str | None = None,
    settings_file: str | None = None,
    sources_dir: str | None = None,
) -> list[str]:
    """
    Build the arguments for `MSBuild.SonarQube.Runner begin`.

    One list element per argument; values are never quoted here, the
    process launcher passes each element through as-is. Optional values
    are only appended when non-blank.

    Args:
        endpoint: Server URL and credentials
        project: Project key, name and version
        database: JDBC settings for pre-5.2 servers (optional)
        additional_args: Free-form arguments, split with shell rules
        settings_file: SonarQube.Analysis.xml path (optional)
        sources_dir: Sources root, used to detect an unset settings file

    Returns:
        Argument list starting with "begin"

    Raises:
        FileNotFoundError: If a settings file is given but does not exist
        ValueError: If additional_args has unbalanced quotes
    """
    args = [
        "begin",
        f"/k:{project.key}",
        f"/n:{project.name}",
        f"/v:{project.version}",
        f"/d:sonar.host.url={endpoint.url}",
    ]

    if not is_blank(endpoint.username):
        args.append(f"/d:sonar.login={endpoint.username}")
    if not is_blank(endpoint.password):
        args.append(f"/d:sonar.password={endpoint.password}")

    if database is not None:
        if not is_blank(database.url):
            args.append(f"/d:sonar.jdbc.url={database.url}")
        if not is_blank(database.username):
            args.append(f"/d:sonar.jdbc.username={database.username}")
        if not is_blank(database.password):
            args.append(f"/d:sonar.jdbc.password={database.password}")

    if not is_blank(additional_args):
        try:
            args.extend(shlex.split(additional_args))
        except ValueError as e:
            raise ValueError(f"Invalid additional arguments: {e}") from e

    if is_file_path_specified(settings_file, sources_dir):
        settings_file = settings_file.strip()
        if not os.path.isfile(settings_file):
            raise FileNotFoundError(
                f"Could not find the specified configuration file: {settings_file}"
            )
        args.append(f"/s:{settings_file}")

    return args
