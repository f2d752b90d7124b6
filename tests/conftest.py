"""Pytest configuration and fixtures for adr-manager tests."""

import pytest

from adr_manager.madr import ArchitecturalDecisionRecord

FULL_MADR = """\
# Use Postgres

* Status: accepted
* Deciders: Alice, Bob
* Date: 2021-03-04

Technical Story: ISSUE-42

## Context and Problem Statement

We need a database for the order service.
It must store semi-structured documents.

## Decision Drivers

* JSON support
* Operational cost

## Considered Options

* Postgres
* MySQL
* SQLite

## Decision Outcome

Chosen option: "Postgres", because of JSON support

### Positive Consequences

* Rich JSON queries

### Negative Consequences

* Another service to run

## Pros and Cons of the Options

### Postgres 14

The latest Postgres release.

* Good, because it has JSONB
* Bad, because it needs tuning

### MySQL

* Good, because the team knows it

### MongoDB

* Bad, because it was never evaluated in production

## Links

* [ADR-0002](0002-use-redis.md)
"""

MINIMAL_MADR = """\
# Use Postgres

## Considered Options

* Postgres
* MySQL

## Decision Outcome

Chosen option: "Postgres", because of JSON support
"""


@pytest.fixture
def full_madr() -> str:
    """A MADR document using every section of the template."""
    return FULL_MADR


@pytest.fixture
def minimal_madr() -> str:
    """The smallest useful MADR document: options and an outcome."""
    return MINIMAL_MADR


@pytest.fixture
def sqlite_record() -> ArchitecturalDecisionRecord:
    """Record built in code, as a caller would before serializing."""
    record = ArchitecturalDecisionRecord(title="Use SQLite", status="proposed")
    sqlite = record.add_option("SQLite")
    sqlite.pros.append("it is embeddable")
    record.add_option("Postgres")
    record.decision_outcome.chosen_option = "SQLite"
    record.decision_outcome.explanation = "it is embeddable"
    record.links.append("https://sqlite.org")
    return record
