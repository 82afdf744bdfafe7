#!/usr/bin/env python3
"""
Estate Admin - Command Line Interface

Usage:
    estate-admin check
    estate-admin list-listings --search villa
    estate-admin get-listing 12
    estate-admin save-listing --file listing.json [--id 12]
    estate-admin save-blog --file blog.json [--id 3]
    estate-admin hero --file hero.json
    estate-admin deploy
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Tuple

from .api import BackendClient, BackendAPIError, Config
from .forms import FormError
from .i18n import SUPPORTED_LANGUAGES
from .logging_setup import setup_logging
from .models import PropertyType, amenities_for, field_specs
from .services import (
    ServiceError,
    ListingService,
    BlogService,
    HeroContentService,
    FooterContentService,
    DeploymentService,
)


LOGGER = logging.getLogger(__name__)

# Commands answered from local data, without a backend connection
OFFLINE_COMMANDS = ('property-types', 'amenities')


def print_json(data, indent=2):
    """Pretty print JSON data"""
    print(json.dumps(data, indent=indent, ensure_ascii=False, default=str))


def fail(message: str):
    print(f"Error: {message}")
    sys.exit(1)


def read_form_file(path: str) -> Tuple[Dict[str, Any], Path]:
    """Load a JSON form document; attachments resolve relative to its folder"""
    file_path = Path(path)
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        fail(f"Could not read {path}: {e}")
    if not isinstance(data, dict):
        fail(f"{path} must contain a JSON object")
    return data, file_path.parent


def print_save_result(result, form):
    print(f"✓ {result.message}")
    for warning in result.warnings:
        print(f"Warning: {warning}")
    print_json(form.to_dict())


# ==================== LOCAL DATA ====================

def cmd_property_types(args, client=None):
    """List property types with their form fields"""
    print_json([
        {
            'value': prop_type.value,
            'label': prop_type.label,
            'fields': [
                {'name': spec.name, 'label': spec.label, 'kind': spec.kind, 'required': spec.required}
                for spec in field_specs(prop_type)
            ],
        }
        for prop_type in PropertyType
    ])


def cmd_amenities(args, client=None):
    """List predefined amenities of a property type"""
    catalog = amenities_for(PropertyType(args.type))
    print_json({category: [a.to_dict() for a in items] for category, items in catalog.items()})


# ==================== BACKEND ====================

def cmd_check(args, client: BackendClient):
    """Test the backend connection"""
    result = client.test_connection()
    print_json(result)
    if not result['success']:
        sys.exit(1)


def cmd_deploy(args, client: BackendClient):
    """Trigger a rebuild of the public site"""
    try:
        message = DeploymentService(client, lang=args.lang).trigger()
        print(f"✓ {message}")
    except ServiceError as e:
        fail(e.message)


def cmd_list_listings(args, client: BackendClient):
    """List listings, newest first"""
    try:
        summaries = ListingService(client, lang=args.lang).list(search=args.search)
        print_json([s.to_dict() for s in summaries])
    except ServiceError as e:
        fail(e.message)


def cmd_get_listing(args, client: BackendClient):
    """Show a listing as its edit form"""
    try:
        form = ListingService(client, lang=args.lang).load(args.listing_id)
        for warning in form.warnings:
            print(f"Warning: {warning}")
        print_json(form.to_dict())
    except ServiceError as e:
        fail(e.message)


def cmd_save_listing(args, client: BackendClient):
    """Create a listing, or edit one with --id"""
    data, base_dir = read_form_file(args.file)
    service = ListingService(client, lang=args.lang)
    try:
        if args.id is not None:
            form = service.load(args.id)
        else:
            form = service.new_form(data.get('type') or PropertyType.PLOT)
        form.apply(data, base_dir)
        result = service.save(form)
        print_save_result(result, form)
    except (ServiceError, FormError) as e:
        fail(e.message)
    except (OSError, ValueError) as e:
        fail(str(e))


def cmd_delete_listing(args, client: BackendClient):
    """Delete a listing"""
    if not args.yes:
        confirm = input(f"Are you sure you want to delete listing {args.listing_id}? (yes/no): ")
        if confirm.lower() != 'yes':
            print("Cancelled.")
            return
    try:
        ListingService(client, lang=args.lang).delete(args.listing_id)
        print("✓ Listing deleted successfully!")
    except ServiceError as e:
        fail(e.message)


def cmd_list_blogs(args, client: BackendClient):
    """List blog posts"""
    try:
        print_json([s.to_dict() for s in BlogService(client, lang=args.lang).list()])
    except ServiceError as e:
        fail(e.message)


def cmd_get_blog(args, client: BackendClient):
    """Show a blog post as its edit form"""
    try:
        form = BlogService(client, lang=args.lang).load(args.blog_id)
        for warning in form.warnings:
            print(f"Warning: {warning}")
        print_json(form.to_dict())
    except ServiceError as e:
        fail(e.message)


def cmd_save_blog(args, client: BackendClient):
    """Create a blog post, or edit one with --id"""
    data, base_dir = read_form_file(args.file)
    service = BlogService(client, lang=args.lang)
    try:
        form = service.load(args.id) if args.id is not None else service.new_form()
        form.apply(data, base_dir)
        result = service.save(form)
        print_save_result(result, form)
    except (ServiceError, FormError) as e:
        fail(e.message)
    except OSError as e:
        fail(str(e))


def cmd_delete_blog(args, client: BackendClient):
    """Delete a blog post"""
    if not args.yes:
        confirm = input(f"Are you sure you want to delete blog post {args.blog_id}? (yes/no): ")
        if confirm.lower() != 'yes':
            print("Cancelled.")
            return
    try:
        BlogService(client, lang=args.lang).delete(args.blog_id)
        print("✓ Blog post deleted successfully!")
    except ServiceError as e:
        fail(e.message)


def _singleton_command(service, args):
    try:
        form = service.load()
        if args.file:
            data, base_dir = read_form_file(args.file)
            form.apply(data, base_dir)
            result = service.save(form)
            print_save_result(result, form)
        else:
            print_json(form.to_dict())
    except (ServiceError, FormError) as e:
        fail(e.message)
    except OSError as e:
        fail(str(e))


def cmd_hero(args, client: BackendClient):
    """Show the hero content, or update it from --file"""
    _singleton_command(HeroContentService(client, lang=args.lang), args)


def cmd_footer(args, client: BackendClient):
    """Show the footer content, or update it from --file"""
    _singleton_command(FooterContentService(client, lang=args.lang), args)


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='Estate Admin - manage listings, blogs and site content',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create a listing from a form file (image paths are relative to the file)
  estate-admin save-listing --file plot.json

  # Edit listing 12
  estate-admin save-listing --file changes.json --id 12

  # Search listings
  estate-admin list-listings --search hyderabad

  # Update the homepage hero, then rebuild the site
  estate-admin hero --file hero.json
  estate-admin deploy
        """
    )

    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--lang', choices=SUPPORTED_LANGUAGES, default=None,
                        help='Language of messages (default: ESTATE_DEFAULT_LANGUAGE)')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    subparsers.add_parser('check', help='Test the backend connection')
    subparsers.add_parser('deploy', help='Trigger a rebuild of the public site')
    subparsers.add_parser('property-types', help='List property types and their fields')

    amenities_parser = subparsers.add_parser('amenities', help='List predefined amenities of a property type')
    amenities_parser.add_argument('--type', '-t', required=True, choices=[t.value for t in PropertyType])

    list_parser = subparsers.add_parser('list-listings', help='List listings')
    list_parser.add_argument('--search', '-s', help='Filter by title')

    get_parser = subparsers.add_parser('get-listing', help='Show a listing')
    get_parser.add_argument('listing_id', type=int, help='Listing ID')

    save_parser = subparsers.add_parser('save-listing', help='Create or edit a listing')
    save_parser.add_argument('--file', '-f', required=True, help='JSON form file')
    save_parser.add_argument('--id', type=int, help='Listing ID to edit')

    delete_parser = subparsers.add_parser('delete-listing', help='Delete a listing')
    delete_parser.add_argument('listing_id', type=int, help='Listing ID')
    delete_parser.add_argument('--yes', '-y', action='store_true', help='Do not ask for confirmation')

    subparsers.add_parser('list-blogs', help='List blog posts')

    get_blog_parser = subparsers.add_parser('get-blog', help='Show a blog post')
    get_blog_parser.add_argument('blog_id', type=int, help='Blog ID')

    save_blog_parser = subparsers.add_parser('save-blog', help='Create or edit a blog post')
    save_blog_parser.add_argument('--file', '-f', required=True, help='JSON form file')
    save_blog_parser.add_argument('--id', type=int, help='Blog ID to edit')

    delete_blog_parser = subparsers.add_parser('delete-blog', help='Delete a blog post')
    delete_blog_parser.add_argument('blog_id', type=int, help='Blog ID')
    delete_blog_parser.add_argument('--yes', '-y', action='store_true', help='Do not ask for confirmation')

    hero_parser = subparsers.add_parser('hero', help='Show or update the homepage hero')
    hero_parser.add_argument('--file', '-f', help='JSON form file with the new content')

    footer_parser = subparsers.add_parser('footer', help='Show or update the site footer')
    footer_parser.add_argument('--file', '-f', help='JSON form file with the new content')

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(0)

    if args.debug:
        Config.DEBUG = True
    setup_logging(logging.DEBUG if Config.DEBUG else logging.INFO)

    commands = {
        'check': cmd_check,
        'deploy': cmd_deploy,
        'property-types': cmd_property_types,
        'amenities': cmd_amenities,
        'list-listings': cmd_list_listings,
        'get-listing': cmd_get_listing,
        'save-listing': cmd_save_listing,
        'delete-listing': cmd_delete_listing,
        'list-blogs': cmd_list_blogs,
        'get-blog': cmd_get_blog,
        'save-blog': cmd_save_blog,
        'delete-blog': cmd_delete_blog,
        'hero': cmd_hero,
        'footer': cmd_footer,
    }

    if args.command in OFFLINE_COMMANDS:
        commands[args.command](args)
        return

    # Validate configuration
    if not Config.validate():
        print("\nPlease configure your backend credentials in the .env file")
        print("See .env.example for required fields")
        sys.exit(1)

    try:
        client = BackendClient.from_config()
    except BackendAPIError as e:
        fail(e.message)

    commands[args.command](args, client)


if __name__ == '__main__':
    main()
