from setuptools import find_packages, setup

setup(
    name="tfs-notifier",
    version="0.1.0",
    packages=find_packages(
        include=[
            "tfs_common",
            "tfs_common.*",
            "tfs_persistence",
            "tfs_persistence.*",
            "tfs_notifier",
            "tfs_notifier.*",
            "tfs_client",
            "tfs_client.*",
            "tfs_admin",
            "tfs_admin.*",
        ]
    ),
    install_requires=[
        "requests>=2.31.0",
        "click>=8.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tfs-notify=tfs_notifier.__main__:main",
            "tfs-admin=tfs_admin.cli:cli",
        ],
    },
    python_requires=">=3.10",
)
