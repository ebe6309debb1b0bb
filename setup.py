from setuptools import setup, find_packages
setup(
    name='helpdesk-client',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    include_package_data=True,
    python_requires='>=3.9',
    description='Declarative helpdesk API requests with real and in-memory backends.',
    author='Your Name',
    author_email='youremail@example.com',
    install_requires=[
        'pyyaml>=6.0',
        'requests>=2.25.0',
        'pydantic>=2.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'pytest11': [
            'helpdesk_client = helpdesk_client.pytest_plugin',
        ],
    },
)
