#!/usr/bin/env python
"""
Diagnostic script to check the Python environment for recordstore.
Run this before the test suite to verify your setup.
"""
import importlib
import os
import sys

print("=" * 60)
print("Python Environment Diagnostic")
print("=" * 60)
print()

print(f"Python executable: {sys.executable}")
print(f"Python version: {sys.version}")
print()

print("Virtual Environment:")
venv_path = os.environ.get('VIRTUAL_ENV', 'Not activated')
print(f"  VIRTUAL_ENV: {venv_path}")
print()

# distribution name -> import name
packages = {
    'flask': 'flask',
    'flask-cors': 'flask_cors',
    'python-dotenv': 'dotenv',
    'click': 'click',
    'pytest': 'pytest',
    'pytest-mock': 'pytest_mock',
}

print("Checking dependencies:")
for package, module in packages.items():
    try:
        mod = importlib.import_module(module)
        version = getattr(mod, '__version__', 'unknown')
        print(f"  ✓ {package}: {version}")
    except ImportError:
        print(f"  ✗ {package}: NOT INSTALLED")
print()

print("Record store configuration:")
print(f"  RECORDSTORE_DATA_DIR: {os.environ.get('RECORDSTORE_DATA_DIR', '(default: data/stores)')}")
print(f"  RECORDSTORE_ERROR_DUMP_DIR: {os.environ.get('RECORDSTORE_ERROR_DUMP_DIR', '(beside failing module)')}")
print(f"  LOG_LEVEL: {os.environ.get('LOG_LEVEL', 'INFO')}")
print()

print("=" * 60)
if venv_path == 'Not activated':
    print("  Activate your virtual environment:")
    print("  source .venv/bin/activate")
else:
    print("  Environment looks good!")
    print("  If imports fail, try: pip install -e '.[test]'")
print("=" * 60)
