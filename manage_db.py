#!/usr/bin/env python3
"""
Database management script for deployment.
Run this during the build/deployment pipeline to create tables and load
the demo data set.
"""
import sys

from padelscore.app import create_app
from padelscore.seed import seed_database


def deploy():
    """Run deployment tasks."""
    print("Preparing database...")
    app = create_app()
    with app.app_context():
        try:
            if seed_database():
                print("✓ Demo data loaded.")
            else:
                print("✓ Database already seeded.")
        except Exception as e:
            print(f"Error seeding database: {e}")
            sys.exit(1)


if __name__ == '__main__':
    deploy()
