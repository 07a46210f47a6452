"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    RESOLUTION_ERROR = 3


class LoaderFamilies(Enum):
    """Mod-loader families supported by the program.

    Args:
        Enum (string): Mod-loader families supported by the program.
    """

    FORGE = "forge"
    NEOFORGE = "neoforge"
    FABRIC = "fabric"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_LOADERS = [
        LoaderFamilies.FORGE.value,
        LoaderFamilies.NEOFORGE.value,
        LoaderFamilies.FABRIC.value,
    ]
    PROMOTIONS = ["recommended", "latest"]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    DOWNLOAD_CHUNK_SIZE = 64 * 1024
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3

    # Remote indexes
    FORGE_PROMOTIONS_URL = (
        "https://files.minecraftforge.net/maven/net/minecraftforge/forge/promotions_slim.json"
    )
    NEOFORGE_VERSIONS_URL = (
        "https://maven.neoforged.net/api/maven/versions/releases/net/neoforged/neoforge"
    )
    FABRIC_META_URL = "https://meta.fabricmc.net/v2"

    # Remote Maven repositories
    REPOSITORY_URL_FORGE = "https://maven.minecraftforge.net/"
    REPOSITORY_URL_NEOFORGE = "https://maven.neoforged.net/releases/"
    REPOSITORY_URL_FABRIC = "https://maven.fabricmc.net/"

    # Well-known Maven coordinates
    MINECRAFT_GROUP = "net.minecraft"
    MINECRAFT_CLIENT_ARTIFACT = "client"
    FORGE_GROUP = "net.minecraftforge"
    FORGE_ARTIFACT = "forge"
    NEOFORGE_GROUP = "net.neoforged"
    NEOFORGE_ARTIFACT = "neoforge"
    FABRIC_GROUP = "net.fabricmc"
    FABRIC_LOADER_ARTIFACT = "fabric-loader"
    DEFAULT_MOD_GROUP = "generated.local"

    # Local layout
    REPO_DIR = "repo"
    LIB_DIR = "lib"
    VERSIONS_DIR = "versions"
    CACHE_DIR = "cache"
    INSTALLER_PROFILE_FILE = "launcher_profiles.json"

    # Installer / runtime
    JAVA_EXECUTABLE = "java"
    ENV_JAVA = "MODTREE_JAVA"
    ENV_JAVA_HOME = "JAVA_HOME"
    ENV_BASE_URL = "MODTREE_BASE_URL"
    ENV_LOG_LEVEL = "MODTREE_LOG_LEVEL"

    # Packaged-unit metadata
    EMBEDDED_MANIFEST = "META-INF/MANIFEST.MF"
    IMPLEMENTATION_VERSION_PATTERN = r"Implementation-Version: (.*)"
    FORGE_MODS_TOML = "META-INF/mods.toml"
    NEOFORGE_MODS_TOML = "META-INF/neoforge.mods.toml"
    FABRIC_MOD_JSON = "fabric.mod.json"
    FORGE_EXAMPLE_MOD_ID = "examplemod"
    FABRIC_EXAMPLE_MOD_ID = "modid"
    FORGE_VERSION_PLACEHOLDER = "${file.jarVersion}"
    FABRIC_VERSION_PLACEHOLDER = "${version}"
    FALLBACK_VERSION = "0.0.0"
