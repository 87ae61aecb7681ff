from daogen.naming import cap_first, db_name, uncap_first

def test_cap_and_uncap_first():
    assert cap_first("status") == "Status"
    assert cap_first("Status") == "Status"
    assert uncap_first("FirstName") == "firstName"
    assert uncap_first("x") == "x"
    assert cap_first("") == ""
    assert uncap_first("") == ""

def test_db_name_splits_camel_case():
    assert db_name("firstName") == "FIRST_NAME"
    assert db_name("createdAtMillis") == "CREATED_AT_MILLIS"
    assert db_name("Note") == "NOTE"
    assert db_name("CustomerOrder") == "CUSTOMER_ORDER"

def test_db_name_keeps_upper_runs_together():
    assert db_name("userID") == "USER_ID"
    assert db_name("URLPath") == "URLPATH"

def test_db_name_of_id_is_deterministic():
    assert db_name("id") == "ID"
    assert db_name("id") == db_name("id")
