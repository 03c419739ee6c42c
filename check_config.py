#!/usr/bin/env python3
"""
Quick configuration checker for MRONJ Screening.
Shows current settings and the fixed decision table.
"""

import os
import sys

try:
    from mronj_screening.config import settings
    from mronj_screening.core.engine.rules import DECISION_TABLE

    print("\n" + "="*70)
    print(" 🔧 MRONJ SCREENING - CURRENT CONFIGURATION")
    print("="*70)

    print("\n🌐 OUTPUT")
    print("-" * 70)
    print(f"  Output Language:       {settings.OUTPUT_LANGUAGE}")
    print(f"  Log Level:             {settings.LOG_LEVEL}")

    print("\n📡 API")
    print("-" * 70)
    print(f"  Host:                  {settings.API_HOST}")
    print(f"  Port:                  {settings.API_PORT}")
    print(f"  CORS Origins:          {', '.join(settings.CORS_ORIGINS)}")

    print("\n📁 FILE PATHS")
    print("-" * 70)
    print(f"  Sample Intakes:        {settings.SAMPLE_INTAKES_DIR}")
    samples_exist = os.path.isdir(settings.SAMPLE_INTAKES_DIR)
    print(f"                         {'✓ Exists' if samples_exist else '❌ NOT FOUND'}")

    print("\n📋 DECISION TABLE (fixed)")
    print("-" * 70)
    for i, rule in enumerate(DECISION_TABLE, 1):
        print(f"  {i}. {rule['id']:<32} -> {rule['risk_level'].value:<9} {rule['description']}")

    print("\n" + "="*70 + "\n")

except ValueError as e:
    print(f"\n❌ Configuration error: {e}\n")
    sys.exit(1)
