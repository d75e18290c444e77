"""Commands that replace the commit flow: config display, setup, completion."""

import getpass
import os
import sys

from autocommit.config import (
    Config,
    CredentialPresent,
    LOCAL_PROVIDERS,
    get_config_path,
    load_config,
    resolve_credential,
    save_config,
)
from autocommit.output import bold, dim, info, warning, print_success


def _mask(key: str | None) -> str:
    if not key:
        return "not set"
    return f"{key[:4]}…{key[-2:]}" if len(key) > 8 else "****"


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .autocommitrc found)")

    env_provider = os.environ.get('AUTOCOMMIT_PROVIDER')
    env_model = os.environ.get('AUTOCOMMIT_MODEL')
    if env_provider or env_model:
        print(f"  {dim('Environment overrides:')}")
        if env_provider:
            print(f"    AUTOCOMMIT_PROVIDER={env_provider}")
        if env_model:
            print(f"    AUTOCOMMIT_MODEL={env_model}")

    credential = resolve_credential(config)
    if isinstance(credential, CredentialPresent):
        key_status = info(f"{_mask(credential.value)} ({credential.source})") if credential.value else info(credential.source)
    else:
        key_status = warning("missing")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:           {info(config.provider)}")
    print(f"    model:              {info(config.model or 'default')}")
    print(f"    api_key:            {key_status}")
    print(f"    mode:               {info(config.mode)}")
    print(f"    max_subject_length: {info(str(config.max_subject_length))}")
    print(f"    max_detail_length:  {info(str(config.max_detail_length))}")
    print(f"    timeout:            {info(str(config.timeout))}s")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .autocommitrc (in current directory)")
    print(f"    Global: ~/.autocommitrc")
    print(f"\n  {dim('Run')} autocommit --setup {dim('to configure')}\n")

    return 0


PROVIDER_CHOICES = [
    ("gemini", "Gemini API (default)"),
    ("claude", "Claude API"),
    ("ollama", "Ollama (free, local, no key)"),
]

MODE_CHOICES = [
    ("narrative", "AI explanation of the changes (default)"),
    ("evidence", "raw diff of every modified file"),
]


def _choose(title: str, options: list[tuple[str, str]]) -> str:
    """Numbered menu; Enter picks the first option."""
    print(f"{title}\n")
    for i, (value, label) in enumerate(options, 1):
        print(f"  {i}. {value} - {label}")
    print()
    numbers = "/".join(str(i) for i in range(1, len(options) + 1))
    while True:
        choice = input(f"Select [{numbers}]: ").strip()
        if not choice:
            return options[0][0]
        if choice.isdigit() and 1 <= int(choice) <= len(options):
            return options[int(choice) - 1][0]


def run_setup() -> int:
    """Interactive wizard that writes ~/.autocommitrc."""
    display_config()
    print(f"{bold('Setup Wizard')}\n")

    provider = _choose("Choose provider:", PROVIDER_CHOICES)

    api_key = None
    if provider not in LOCAL_PROVIDERS:
        api_key = getpass.getpass("API key (input hidden, Enter to use environment): ").strip() or None

    model = input("\nModel (Enter for default): ").strip() or None
    print()
    mode = _choose("Commit body:", MODE_CHOICES)

    path = save_config(Config(provider=provider, model=model, api_key=api_key, mode=mode), global_config=True)
    print_success(f"Saved to {path}")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')
    line = 'eval "$(register-python-argcomplete autocommit)"'

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell autocommit | Out-String | Invoke-Expression\n")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish autocommit | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
