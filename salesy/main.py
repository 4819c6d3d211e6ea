"""
Command line interface for Salesy.

Signs in (when credentials are given), then runs one command against the
configured data store: import a sales CSV, list products, show stock alerts,
recent sales or the dashboard summary, or set up the SQL schema.
"""
import argparse
import os
import sys

from tabulate import tabulate

from salesy.config import config
from salesy.core.catalog import filter_products, paginate
from salesy.core.inventory_risk import product_risk
from salesy.core.upload_state import UploadStatus
from salesy.db import connection
from salesy.exceptions import SalesyError
from salesy.logging_setup import logger, get_logger
from salesy.services.alert_service import ALERT_FILTERS, AlertInbox, build_stock_alerts
from salesy.services.auth_service import AuthService
from salesy.services.import_service import SalesImportService
from salesy.services.product_service import ProductService
from salesy.services.reporting_service import ReportingService
from salesy.services.sales_history_service import SalesHistoryService

log = get_logger('salesy.cli')

def import_sales(store, args):
    """Import a sales history CSV file."""
    status = UploadStatus()
    service = SalesImportService(store, batch_size=args.batch_size)
    summary = service.import_file(args.file, status=status)

    print(f"\nSuccessfully processed {summary.inserted_count} records from {summary.file_name}")
    print(f"New products created: {summary.new_product_count}")
    if summary.product_creation_error:
        print(f"Warning: {summary.product_creation_error}")

def list_products(store, args):
    """List the catalog with optional search and filters."""
    products = ProductService(store).list_products()
    matching = filter_products(products, args.search, args.category, args.brand)
    per_page = args.per_page or config.inventory_config['items_per_page']
    page = paginate(matching, args.page, per_page)

    if not page.items:
        print("No products found")
        return

    medium_multiplier = config.inventory_config['medium_risk_multiplier']
    table_data = [
        [
            product['name'],
            product.get('sku', ''),
            product.get('category', ''),
            product.get('brand', ''),
            f"{product.get('current_stock', 0)} / {product.get('reorder_level', 0)}",
            str(product_risk(product, medium_multiplier)),
        ]
        for product in page.items
    ]

    print(tabulate(table_data, headers=['Name', 'SKU', 'Category', 'Brand', 'Stock / Reorder', 'Risk']))
    first = (page.page - 1) * page.per_page + 1
    print(f"\nShowing {first} to {first + len(page.items) - 1} of {page.total} (page {page.page}/{page.total_pages})")

def show_alerts(store, args):
    """Show stock alerts derived from the catalog."""
    inbox = AlertInbox(build_stock_alerts(ProductService(store).list_products()))
    alerts = inbox.filter(args.filter)

    if not alerts:
        print("You're all caught up!" if args.filter == 'all' else f"No {args.filter} alerts found.")
        return

    table_data = [[str(alert.type), alert.title, alert.message, alert.action or ''] for alert in alerts]
    print(tabulate(table_data, headers=['Type', 'Title', 'Message', 'Action']))
    print(f"\nUnread: {inbox.unread_count}")

def show_sales(store, args):
    """Show the most recent sales history rows."""
    rows, total = SalesHistoryService(store).fetch_sales(args.limit)

    table_data = [
        [row['sale_date'], row['product_name'], row.get('brand', ''), row['quantity_sold'], row.get('festival') or '']
        for row in rows
    ]
    print(tabulate(table_data, headers=['Date', 'Product', 'Brand', 'Quantity', 'Festival']))
    print(f"\nShowing {len(rows)} of {total} records")

def show_summary(store, args):
    """Show dashboard KPIs."""
    summary = ReportingService(store).dashboard()

    print(tabulate([
        ['Active SKUs', summary['active_skus']],
        ['Critical Alerts', summary['critical_alerts']],
        ['Low Stock Items', summary['low_stock_items']],
        ['Units Sold', summary['total_units_sold']],
        ['Sales Records', summary['total_sales_records']],
    ], headers=['Metric', 'Value']))

    if summary['top_products']:
        print("\nTop Products:")
        print(tabulate(summary['top_products'], headers=['Product', 'Units']))

def setup_db(store, args):
    """Create (optionally dropping first) the SQL tables."""
    if args.drop:
        connection.drop_all_tables()
        log.info("Dropped existing tables")
    connection.create_all_tables()
    log.info("Database tables created")
    print("Database tables created")

def build_parser():
    parser = argparse.ArgumentParser(description='Salesy inventory and sales import tools')

    parser.add_argument('--config', help='Path to a settings.ini file')
    parser.add_argument('--email', default=os.getenv('SALESY_EMAIL'), help='Account email')
    parser.add_argument('--password', default=os.getenv('SALESY_PASSWORD'), help='Account password')

    subparsers = parser.add_subparsers(dest='command', help='Commands')
    subparsers.required = True

    import_parser = subparsers.add_parser('import', help='Import a sales history CSV file')
    import_parser.add_argument('file', help='CSV file with Date, Product Name and Quantity Sold columns')
    import_parser.add_argument('--batch-size', type=int, help='Rows per insert call')
    import_parser.set_defaults(func=import_sales)

    products_parser = subparsers.add_parser('products', help='List products')
    products_parser.add_argument('--search', help='Match product name or SKU')
    products_parser.add_argument('--category', help='Only this category')
    products_parser.add_argument('--brand', help='Only this brand')
    products_parser.add_argument('--page', type=int, default=1, help='Page number')
    products_parser.add_argument('--per-page', type=int, help='Products per page')
    products_parser.set_defaults(func=list_products)

    alerts_parser = subparsers.add_parser('alerts', help='Show stock alerts')
    alerts_parser.add_argument('--filter', choices=ALERT_FILTERS, default='all', help='Alert tab to show')
    alerts_parser.set_defaults(func=show_alerts)

    sales_parser = subparsers.add_parser('sales', help='Show recent sales history')
    sales_parser.add_argument('--limit', type=int, help='Maximum rows to show')
    sales_parser.set_defaults(func=show_sales)

    summary_parser = subparsers.add_parser('summary', help='Show dashboard KPIs')
    summary_parser.set_defaults(func=show_summary)

    setup_parser = subparsers.add_parser('setup-db', help='Create the SQL schema')
    setup_parser.add_argument('--drop', action='store_true', help='Drop existing tables first')
    setup_parser.set_defaults(func=setup_db)

    return parser

def main(argv=None):
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    try:
        if args.config:
            config.load(args.config)
            connection.db.reset()

        store = connection.get_store()
        if args.email or args.password:
            AuthService(store).sign_in(args.email, args.password)

        args.func(store, args)
    except SalesyError as e:
        log.error(f"{args.command} failed: {str(e)}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    logger.app_logger.debug(f"{args.command} finished")
    return 0

if __name__ == "__main__":
    sys.exit(main())
