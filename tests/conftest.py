import pytest

from parsers.parser_config import ParserConfig


SAMPLE_HTML = """<html>
<head><title>AWR Report</title></head>
<body>
<h3>Time Model Statistics</h3>
<table>
<tr><th>Statistic Name</th><th>Time (s)</th><th>% of DB Time</th></tr>
<tr><td>DB time</td><td>3,600.50</td><td></td></tr>
<tr><td>CPU time</td><td>1,200.25</td><td>33.34</td></tr>
<tr><td>sql execute elapsed time</td><td>3,000.00</td><td>83.32</td></tr>
</table>
<h3>Load Profile</h3>
<table>
<tr><th>Load Profile</th><th>Per Second</th><th>Per Transaction</th></tr>
<tr><td>User calls:</td><td>1,234.5</td><td>12.3</td></tr>
</table>
<h3>Top SQL with Top Events</h3>
<table>
<tr><th>SQL ID</th><th>Plan Hash</th><th>Executions</th><th>% Activity</th><th>Event</th><th>% Event</th><th>Top Row Source</th><th>% Row Source</th></tr>
<tr><td>fh1c4w9qda6jr</td><td>3666371265</td><td>4</td><td>3.10</td><td>db file sequential read</td><td>2.50</td><td>TABLE ACCESS - FULL</td><td>1.20</td></tr>
<tr><td>7ztv2z24kw0s0</td><td>0</td><td>1,024</td><td>1.55</td><td>CPU + Wait for CPU</td><td>1.55</td><td>INDEX - RANGE SCAN</td><td>1.00</td></tr>
<tr><td></td><td>111</td><td>2</td><td>0.50</td><td>log file sync</td><td>0.50</td><td>HASH JOIN</td><td>0.50</td></tr>
</table>
<h3>Top 10 Foreground Events by Total Wait Time</h3>
<table>
<tr><th>Wait Event</th><th>Waits</th><th>Total Wait Time (sec)</th><th>Wait Class</th></tr>
<tr><td>db file sequential read</td><td>12,345</td><td>456.7</td><td>User I/O</td></tr>
<tr><td>log file sync</td><td>2,345</td><td>123.4</td><td>Commit</td></tr>
<tr><td>direct path read</td><td>345</td><td>12.3</td><td>User I/O</td></tr>
</table>
<h3>Complete List of SQL Text</h3>
<table>
<tr><th>SQL Id</th><th>SQL Text</th></tr>
<tr><td>fh1c4w9qda6jr</td> <td>SELECT o.id, o.total
FROM orders o
WHERE o.status = :1</td></tr>
</table>
</body>
</html>
"""

SAMPLE_TEXT = """WORKLOAD REPOSITORY report
DB Time: 1234.5 s
CPU Time: 567.8 s
Sessions: 42

Top SQL
fh1c4w9qda6jr 3666371265 4 3.10
7ztv2z24kw0s0 0 1,024 1.55 extra tokens

WAIT EVENTS:
abcdefghijklm 1 2 3
db file sequential read wait event
"""


@pytest.fixture
def quiet_config():
    return ParserConfig(verbose=False)


@pytest.fixture
def sample_html():
    return SAMPLE_HTML


@pytest.fixture
def sample_text():
    return SAMPLE_TEXT
