"""Shared helpers for unit tests."""

import yaml


BUILD_YAML = {
    'project_name': 'Yaaf.Sample',
    'project_summary': 'Sample library',
    'project_description': 'A library used to exercise the build targets',
    'project_authors': ['Jane Doe', 'John Roe'],
    'copyright_notice': 'Copyright (c) Jane Doe 2024',
    'nuget_tags': 'sample build',
    'github_user': 'janedoe',
    'github_project': 'Yaaf.Sample',
    'version': '1.2.3',
    'generated_file_list': ['Yaaf.Sample.dll', 'Yaaf.Sample.xml'],
    'nuget_packages': [{'file': 'Yaaf.Sample.nuspec'}],
    'build_targets': [
        {'simple_build_name': 'net40', 'custom_build_name': 'net40'},
        {'simple_build_name': 'net45', 'custom_build_name': 'net45'},
    ],
}


def write_build_yaml(project_dir, settings):
    path = project_dir / "build.yaml"
    path.write_text(yaml.safe_dump(settings))
    return path
