"""
Basic IRI usage example.

Demonstrates parsing, URI conversion, equality and reference resolution.
"""

import logging

from iri import IRI, MalformedIri, get_config


def main():
    """Run basic usage example."""
    logging.basicConfig(level=get_config().log_level)

    print("=" * 60)
    print("IRI Toolkit: Basic Usage Example")
    print("=" * 60)

    # Example 1: Parse an IRI and look at its components
    print("\n1. Parsing")
    print("-" * 60)

    raw_iri = "HTTP://Exämple.org:80/pȧth/../ñ?k€y=val#frågment"
    print(f"Raw IRI: {raw_iri}")

    iri = IRI(raw_iri)
    print(f"\nIRI:       {iri}")
    print(f"URI:       {iri.to_uri_string()}")
    print(f"Scheme:    {iri.scheme}")
    print(f"Host:      {iri.host}")
    print(f"Port:      {iri.port}")
    print(f"Path:      {iri.path}")
    print(f"Query:     {iri.query}")
    print(f"Fragment:  {iri.fragment}")
    print(f"ID:        {iri.fingerprint()}")

    # Example 2: Equality is code point equality
    print("\n\n2. Equality")
    print("-" * 60)

    encoded = IRI("http://example.org/%7Euser")
    literal = IRI("http://example.org/~user")
    print(f"{encoded!r} == {literal!r}: {encoded == literal}")
    print(f"Same URI: {encoded.to_uri() == literal.to_uri()}")

    # Example 3: Relative references
    print("\n\n3. Resolution")
    print("-" * 60)

    base = IRI("https://例子.com/docs/guide/intro")
    for reference in ["../api/ñ", "?page=2", "//other.org/", "#top"]:
        resolved = base.resolve(reference)
        print(f"  {reference:<14} -> {resolved}  ({resolved.to_uri_string()})")

    # Example 4: Malformed input
    print("\n\n4. Validation")
    print("-" * 60)

    for candidate in ["http://my host.com/", "http://[:::1/", "path%ax"]:
        try:
            IRI(candidate)
        except MalformedIri as e:
            print(f"  Rejected {candidate!r}: {e.reason}")

    print("\n" + "=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
