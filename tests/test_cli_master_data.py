"""Tests for organization, warehouse, product, payment condition and document type commands."""

from yottaerp.cli.main import cli


class TestOrganizationCommands:
    """Tests for org commands."""

    def test_create_and_list(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "org", "create", "ACME", "Acme S.r.l."]
        )
        assert result.exit_code == 0
        assert "Created organization 'ACME' (ID: 1)" in result.output

        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "org", "list"])
        assert result.exit_code == 0
        assert "ACME" in result.output
        assert "Acme S.r.l." in result.output

    def test_duplicate(self, run_cli):
        result = run_cli("org", "create", "ACME", "Ancora Acme")
        assert result.exit_code == 1
        assert "Organization with code 'ACME' already exists" in result.output

    def test_commands_need_an_organization(self, cli_runner, temp_db):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "warehouse", "list"])
        assert result.exit_code == 1
        assert "No organization selected" in result.output

    def test_unknown_organization(self, run_cli):
        result = run_cli("warehouse", "list", org="NOPE")
        assert result.exit_code == 1
        assert "Organization 'NOPE' not found" in result.output

    def test_organization_by_id(self, run_cli, organization):
        result = run_cli("warehouse", "list", org=str(organization.id))
        assert result.exit_code == 0
        assert "No warehouses found." in result.output


class TestWarehouseCommands:
    """Tests for warehouse commands."""

    def test_create_and_list(self, run_cli):
        result = run_cli("warehouse", "create", "MAG1", "Magazzino Centrale")
        assert result.exit_code == 0
        assert "Created warehouse 'MAG1'" in result.output

        result = run_cli("warehouse", "list")
        assert "MAG1" in result.output
        assert "Magazzino Centrale" in result.output

    def test_warehouses_are_per_organization(self, run_cli, warehouses, other_organization):
        result = run_cli("warehouse", "list", org="BETA")
        assert result.exit_code == 0
        assert "No warehouses found." in result.output


class TestProductCommands:
    """Tests for product and product-type commands."""

    def test_create_product_type(self, run_cli):
        result = run_cli("product-type", "create", "SERVIZIO", "Servizi", "--no-stock")
        assert result.exit_code == 0
        assert "Created product type 'SERVIZIO'" in result.output

        result = run_cli("product-type", "list")
        assert "SERVIZIO" in result.output
        assert "no stock" in result.output

    def test_create_product(self, run_cli, product_types, warehouses):
        result = run_cli(
            "product", "create", "VITE-M8", "Vite M8",
            "--price", "0,35", "--vat", "22%", "--type", "MERCE", "--warehouse", "MAG1",
        )
        assert result.exit_code == 0
        assert "Created product 'VITE-M8'" in result.output

        result = run_cli("product", "list")
        assert "VITE-M8" in result.output
        assert "€ 0.35" in result.output
        assert "VAT 22.00%" in result.output

    def test_create_product_invalid_vat(self, run_cli):
        result = run_cli("product", "create", "X", "X", "--price", "1", "--vat", "22")
        assert result.exit_code == 1
        assert "must be a fraction" in result.output

    def test_create_product_vat_over_100_percent(self, run_cli):
        result = run_cli("product", "create", "X", "X", "--price", "1", "--vat", "150%")
        assert result.exit_code == 1
        assert "must be a fraction" in result.output

    def test_create_product_unknown_type(self, run_cli):
        result = run_cli("product", "create", "X", "X", "--price", "1", "--vat", "22%", "--type", "NOPE")
        assert result.exit_code == 1
        assert "Product type 'NOPE' not found" in result.output

    def test_stock_of_new_product(self, run_cli, sample_products):
        result = run_cli("product", "stock", "VITE-M8")
        assert result.exit_code == 0
        assert "Stock of VITE-M8: 0" in result.output


class TestPaymentConditionCommands:
    """Tests for payment-condition commands."""

    def test_create_and_list(self, run_cli):
        result = run_cli(
            "payment-condition", "create", "RB 30-60 FM",
            "--days", "30", "--gap", "30", "--dues", "2", "--end-of-month",
        )
        assert result.exit_code == 0
        assert "Created payment condition 'RB 30-60 FM'" in result.output

        result = run_cli("payment-condition", "create", "Vecchia", "--inactive")
        assert result.exit_code == 0

        result = run_cli("payment-condition", "list")
        assert "2 due(s), first at 30 days, every 30 days FM" in result.output
        assert "Vecchia" in result.output
        assert "(inactive)" in result.output

        result = run_cli("payment-condition", "list", "--active-only")
        assert "Vecchia" not in result.output

    def test_zero_dues(self, run_cli):
        result = run_cli("payment-condition", "create", "Mai", "--dues", "0")
        assert result.exit_code == 1
        assert "Number of dues must be at least 1" in result.output

    def test_preview(self, run_cli, payment_conditions):
        result = run_cli(
            "payment-condition", "preview", "RB 30-60 FM", "1.000,00", "--date", "2024-01-15"
        )
        assert result.exit_code == 0
        assert "Rata 1 - 29/02/2024 - € 500.00" in result.output
        assert "Rata 2 - 31/03/2024 - € 500.00" in result.output

    def test_preview_rejects_zero_amount(self, run_cli, payment_conditions):
        result = run_cli("payment-condition", "preview", "RD", "0", "--date", "2024-01-15")
        assert result.exit_code == 1
        assert "Total amount must be greater than zero" in result.output


class TestDocumentTypeCommands:
    """Tests for document-type commands."""

    def test_empty_list_suggests_seed(self, run_cli):
        result = run_cli("document-type", "list")
        assert "document-type seed" in result.output

    def test_seed_and_list(self, run_cli):
        result = run_cli("document-type", "seed")
        assert result.exit_code == 0
        assert "Created 7 document type(s)" in result.output

        result = run_cli("document-type", "seed")
        assert "Created 0 document type(s)" in result.output

        result = run_cli("document-type", "list")
        assert "Fattura Immediata" in result.output
        assert "Nota di Credito" in result.output

    def test_create(self, run_cli):
        result = run_cli(
            "document-type", "create", "caf", "Conto acquisto",
            "--stock-sign", "+1", "--numerator", "CAF",
        )
        assert result.exit_code == 0
        assert "Created document type 'CAF'" in result.output

    def test_create_rejects_unknown_sign(self, run_cli):
        result = run_cli("document-type", "create", "X", "X", "--stock-sign", "2")
        assert result.exit_code != 0
